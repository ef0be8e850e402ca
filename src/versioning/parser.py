"""Parsing of platform versions and version range expressions.

Accepted version forms:
- Maven/Spring style: ``2.2.0.RELEASE``, ``2.2.0.M3``, ``2.2.0.RC1``,
  ``2.2.0.BUILD-SNAPSHOT``, ``2.2.0-SNAPSHOT``, ``2.2.0``, ``2.2``
- semver pre-releases: ``2.2.0-rc.1``, ``2.2.0-beta.2``
- anything else PEP 440 accepts (``2.2.0rc1``, ``2.2.0.dev0``,
  ``2.2.0+build.5``), normalized through ``packaging``

Accepted range forms: ``[a,b)``, ``(a,b]``, ``[a,b]``, ``(a,b)``,
``[a,)``, ``[a]`` (exactly ``a``) and a bare ``a`` meaning ``[a,+inf)``.
"""

import re
from typing import Optional

from packaging import version as pep440

from errors import InvalidVersionError

from .models import Qualifier, Version, VersionRange

_VERSION_PATTERN = re.compile(
    r"^(\d+)\.(\d+)(?:\.(\d+))?"
    r"(?:[.-]([A-Za-z]+(?:-[A-Za-z]+)?)(?:\.?(\d+))?)?$"
)

# token -> (qualifier, label)
_QUALIFIER_TOKENS = {
    "M": (Qualifier.MILESTONE, ""),
    "MILESTONE": (Qualifier.MILESTONE, ""),
    "ALPHA": (Qualifier.MILESTONE, "alpha"),
    "BETA": (Qualifier.MILESTONE, "beta"),
    "RC": (Qualifier.RELEASE_CANDIDATE, ""),
    "CR": (Qualifier.RELEASE_CANDIDATE, ""),
    "RELEASE": (Qualifier.RELEASE, ""),
    "FINAL": (Qualifier.RELEASE, ""),
    "GA": (Qualifier.RELEASE, ""),
    "SNAPSHOT": (Qualifier.SNAPSHOT, ""),
    "BUILD-SNAPSHOT": (Qualifier.SNAPSHOT, ""),
}

_PEP440_PRE = {
    "a": (Qualifier.MILESTONE, "alpha"),
    "b": (Qualifier.MILESTONE, "beta"),
    "rc": (Qualifier.RELEASE_CANDIDATE, ""),
}


def parse_version(text: str) -> Version:
    """Parse a version string into a comparable Version.

    Args:
        text: Version text, i.e. "2.2.0.RELEASE".

    Raises:
        InvalidVersionError: If the text is not a recognizable version.

    Returns:
        Version
    """
    if not isinstance(text, str) or not text.strip():
        raise InvalidVersionError(f"Invalid version '{text}'")
    raw = text.strip()

    match = _VERSION_PATTERN.match(raw)
    if match:
        major, minor, patch, token, number = match.groups()
        if token is None:
            return Version(int(major), int(minor), int(patch or 0), text=raw)
        mapped = _QUALIFIER_TOKENS.get(token.upper())
        if mapped is not None:
            qualifier, label = mapped
            return Version(
                int(major), int(minor), int(patch or 0),
                qualifier=qualifier,
                qualifier_version=int(number or 0),
                label=label,
                text=raw,
            )

    return _parse_pep440(raw)


def _parse_pep440(raw: str) -> Version:
    """Fallback parser for PEP 440 style strings."""
    try:
        parsed = pep440.Version(raw)
    except pep440.InvalidVersion as exc:
        raise InvalidVersionError(f"Invalid version '{raw}'") from exc

    if len(parsed.release) > 3:
        raise InvalidVersionError(f"Invalid version '{raw}': at most three numeric components are supported")
    release = list(parsed.release) + [0, 0]
    major, minor, patch = release[0], release[1], release[2]
    if parsed.dev is not None or parsed.local is not None:
        return Version(major, minor, patch, qualifier=Qualifier.SNAPSHOT, text=raw)
    if parsed.pre is not None:
        kind, number = parsed.pre
        qualifier, label = _PEP440_PRE[kind]
        return Version(major, minor, patch, qualifier=qualifier, qualifier_version=number, label=label, text=raw)
    return Version(major, minor, patch, text=raw)


def parse_range(text: str) -> VersionRange:
    """Parse a version range expression.

    Args:
        text: Range text, i.e. "[2.0.0.RELEASE,2.3.0.M1)" or "2.3.0.M1".

    Raises:
        InvalidVersionError: If the range is malformed or has no lower bound.

    Returns:
        VersionRange
    """
    if not isinstance(text, str) or not text.strip():
        raise InvalidVersionError(f"Invalid version range '{text}'")
    spec = text.strip()

    if spec[0] not in "[(":
        if spec[-1] in "])" or "," in spec:
            raise InvalidVersionError(f"Invalid version range '{text}'")
        return VersionRange(lower=parse_version(spec))

    if len(spec) < 3 or spec[-1] not in "])":
        raise InvalidVersionError(f"Invalid version range '{text}'")

    lower_inclusive = spec.startswith("[")
    upper_inclusive = spec.endswith("]")
    inner = spec[1:-1]
    parts = [p.strip() for p in inner.split(",")]

    # Single-element bracket [1.2] means exactly that version
    if len(parts) == 1:
        if not (lower_inclusive and upper_inclusive) or not parts[0]:
            raise InvalidVersionError(f"Invalid version range '{text}'")
        exact = parse_version(parts[0])
        return VersionRange(lower=exact, lower_inclusive=True, upper=exact, upper_inclusive=True)

    if len(parts) != 2 or not parts[0]:
        raise InvalidVersionError(f"Invalid version range '{text}'")

    lower = parse_version(parts[0])
    upper: Optional[Version] = parse_version(parts[1]) if parts[1] else None
    if upper is not None and upper < lower:
        raise InvalidVersionError(f"Invalid version range '{text}': upper bound below lower bound")
    return VersionRange(
        lower=lower,
        lower_inclusive=lower_inclusive,
        upper=upper,
        upper_inclusive=upper_inclusive if upper is not None else False,
    )
