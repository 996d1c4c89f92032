from pathlib import Path

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_system_prompt_template(path: Path | None = None) -> str:
    """Load the tutor system prompt template.

    Args:
        path: Path to the template file.
              Defaults to the bundled system_prompt.txt.

    Returns:
        The raw template string with an ``{exam_clause}`` placeholder.

    Raises:
        OSError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "system_prompt.txt"
    return path.read_text(encoding="utf-8")
