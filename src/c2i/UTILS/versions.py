"""
Semantic version parsing shared by the chart index and the version filters.
"""
import semver


def to_semver(value: str) -> semver.Version:
    """
    Parses a semantic version, tolerating surrounding whitespace, a leading
    ``v`` and a missing minor or patch number (``2.6`` is ``2.6.0``).

    :raises ValueError: If the string is not a semantic version.
    :raises TypeError: If the value is not a string.
    """
    if not isinstance(value, str):
        raise TypeError(f"version must be a string, not {type(value).__name__}")
    value = value.strip()
    if value[:1] in ("v", "V"):
        value = value[1:]
    return semver.Version.parse(value, optional_minor_and_patch=True)
