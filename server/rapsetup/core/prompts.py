# rapsetup/core/prompts.py
"""
Prompt and output schema for the environment generation call.

Goals:
- Embed the user's configuration verbatim so the model sees exactly what was asked.
- Force a JSON-only structured output the backend can validate.
- Keep construction a pure function of the config: same config, same prompt text.
"""

from typing import Any, Dict

from rapsetup.models import SetupConfig

# Open API subset accepted by Gemini's response_schema
RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "files": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "filename": {"type": "string", "description": "Name of the file (e.g., install.R, setup.sh)"},
                    "language": {"type": "string", "description": "Programming language for syntax highlighting (r, bash, markdown)"},
                    "content": {"type": "string", "description": "The actual code content of the file"},
                    "description": {"type": "string", "description": "A short one-line description of what this file does"},
                },
                "required": ["filename", "language", "content", "description"],
            },
        },
        "summary": {
            "type": "string",
            "description": "A brief summary of the environment strategy.",
        },
    },
    "required": ["files", "summary"],
}


def build_system_prompt() -> str:
    return (
        "You are a DevOps and Bioinformatics expert specializing in the UK Biobank "
        "Research Analysis Platform (UKB-RAP) and R.\n"
        "OUTPUT RULES:\n"
        " - Return EXACTLY one valid JSON object and nothing else.\n"
        " - Top-level keys: files (array), summary (string).\n"
        " - Each item in 'files' is {\"filename\", \"language\", \"content\", \"description\"}, all strings.\n"
        " - 'content' is the full file body, not a diff or an excerpt.\n"
    )


def build_user_prompt(config: SetupConfig) -> str:
    # booleans are rendered the way the original form reports them: true/false
    prompt_lines = [
        "The user wants to set up an R environment on a UKB-RAP instance (typically Ubuntu-based).",
        "",
        f"User Goal: {config.goal}",
        f"Requested R Packages: {config.packages}",
        f"R Version Preference: {config.r_version}",
        f"Include Bioconductor: {str(config.include_bioconductor).lower()}",
        f"Include Tidyverse: {str(config.include_tidyverse).lower()}",
        "",
        "Your task is to generate the necessary configuration files to establish this environment.",
        "You MUST infer the necessary Linux system dependencies (via apt-get) required for the requested "
        "R packages (e.g., libxml2-dev for XML, libgdal-dev for sf).",
        "",
        "Please generate the following files:",
        "1. 'system_dependencies.sh': A bash script to update apt and install system libraries.",
        "2. 'install_packages.R': An R script to install CRAN and Bioconductor packages with error checking. "
        "Use 'renv' or 'remotes' if appropriate, or base install.packages. Set a CRAN mirror.",
        "3. 'startup_script.sh': A master shell script that calls the system update and then runs the R "
        "install script. This is what the user would run on instance startup.",
        "4. 'README.md': Instructions on how to use these files on UKB-RAP (e.g., uploading to the project, "
        "running via tty or Cloud Workstation).",
        "",
        "Ensure the code is production-ready, handles errors, and is specifically tailored for the UKB-RAP "
        "environment constraints.",
        "",
        "Output: produce the single JSON object with 'files' and 'summary'. No extra text.",
    ]
    return "\n".join(prompt_lines)


def build_environment_prompt(config: SetupConfig) -> str:
    return build_system_prompt() + "\n\n" + build_user_prompt(config)
