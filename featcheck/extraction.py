"""Feature-name extraction from cfg guards.

Guards look like `#[cfg(feature = "foo")]` or
`#[cfg(any(feature = "foo", feature="bar-baz"))]`. Extraction works line by
line and never raises: a line that does not match simply yields nothing.
"""

import re

# Name is word characters and hyphens; an empty name is kept on purpose.
FEATURE_GUARD_RE = re.compile(r'feature\s*=\s*"(?P<feature>[\w-]*)"')

# Same guard as a ripgrep (Rust regex) pattern, used to pre-filter lines.
FEATURE_GUARD_RG_PATTERN = r'feature\s*=\s*"[\w-]*"'


def extract_feature_names(line: str) -> list[str]:
    """Return the feature names referenced on one line, in order.

    e.g. `#[cfg(any(feature = "foo", feature= "bar"))]` -> `["foo", "bar"]`
    """
    if "feature" not in line:
        return []
    return [match.group("feature") for match in FEATURE_GUARD_RE.finditer(line)]
