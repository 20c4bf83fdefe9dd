"""
Prompt Builder - bracketed placeholder substitution for letter templates.

Pure string functions, no I/O:

    >>> extract_variables("Dear [Name], welcome to [Company]. Bye [Name]")
    ['Name', 'Company', 'Name']
    >>> fill_template("Dear [Company Name]", {"company name": "Acme"})
    'Dear Acme'
"""

import re
from typing import Dict, List, Mapping, Optional

# An opening bracket, one or more non-bracket characters, a closing bracket
PLACEHOLDER_PATTERN = re.compile(r"\[([^\]]+)\]")

# Case-insensitive defaults for well-known fields
DEFAULT_VALUES: Dict[str, str] = {
    "company name": "Acme Corporation",
    "position": "Software Developer",
    "candidate name": "John Doe",
    "your name": "Jane Smith",
}


def extract_variables(template_body: str) -> List[str]:
    """
    Return placeholder names in order of appearance.

    Duplicates are kept; an empty or placeholder-free body yields [].
    """
    if not template_body:
        return []
    return PLACEHOLDER_PATTERN.findall(template_body)


def build_variable_map(template_body: str) -> Dict[str, str]:
    """
    Map every placeholder in the body to a default value.

    Names without a known default map to their own bracketed form, so
    "[Custom Field]" survives substitution unchanged.
    """
    variables: Dict[str, str] = {}
    for name in extract_variables(template_body):
        variables[name] = DEFAULT_VALUES.get(name.lower(), f"[{name}]")
    return variables


def fill_template(template_body: str, variables: Mapping[str, Optional[str]]) -> str:
    """
    Substitute every [name] occurrence, case-insensitively, and trim.

    Placeholders with no entry in `variables` are left verbatim. An empty
    result means the prompt is unusable; the caller decides how to fail.
    """
    result = template_body or ""
    for name, value in variables.items():
        pattern = re.compile(r"\[" + re.escape(name) + r"\]", re.IGNORECASE)
        replacement = value or ""
        # Function replacement keeps backslashes in values literal
        result = pattern.sub(lambda _match: replacement, result)
    return result.strip()
