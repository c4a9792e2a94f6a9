# src/yieldgap/services/validation.py

from typing import Any, Optional

from yieldgap.analysis.templates import LANGUAGES


def validate_input_text(text: Any, field_name: str = "text") -> str:
    """
    Boundary check before extraction.
    Only real strings are accepted; an empty string is valid and simply
    yields an analysis with every field absent.
    """
    if not isinstance(text, str):
        raise ValueError(f"Invalid type for {field_name}: {type(text)}")
    return text


def validate_optional_text(text: Any, field_name: str = "auxiliary_text") -> Optional[str]:
    if text is None:
        return None
    return validate_input_text(text, field_name)


def validate_language(language: Any) -> str:
    if language not in LANGUAGES:
        raise ValueError(f"Unsupported report language: {language!r}")
    return language
