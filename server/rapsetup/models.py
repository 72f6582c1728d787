from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator

# value -> label shown in the version dropdown
R_VERSIONS = {
    "4.3": "4.3.x (Recommended)",
    "4.2": "4.2.x",
    "4.1": "4.1.x",
    "4.0": "4.0.x",
}


class SetupConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    goal: str = "Analyze GWAS summary statistics and perform visualization"
    packages: str = "data.table, ggplot2, dplyr"
    r_version: str = "4.3"
    include_bioconductor: bool = False
    include_tidyverse: bool = True

    @field_validator("r_version")
    @classmethod
    def _known_r_version(cls, v: str) -> str:
        if v not in R_VERSIONS:
            raise ValueError(f"unsupported R version {v!r}; choose one of {', '.join(R_VERSIONS)}")
        return v


class GeneratedFile(BaseModel):
    model_config = ConfigDict(frozen=True)

    filename: str = Field(..., description="Name of the file (e.g., install.R, setup.sh)")
    language: str = Field(..., description="Programming language for syntax highlighting (r, bash, markdown)")
    content: str = Field(..., description="The actual code content of the file")
    description: str = Field(..., description="A short one-line description of what this file does")


class GenerationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    files: List[GeneratedFile] = Field(..., description="Generated files, in tab order")
    summary: str = Field(..., description="A brief summary of the environment strategy.")


class GeneratorStatus(str, Enum):
    IDLE = "IDLE"
    GENERATING = "GENERATING"
    SUCCESS = "SUCCESS"
    ERROR = "ERROR"
