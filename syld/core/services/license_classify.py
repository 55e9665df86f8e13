"""
OSI license classification — offline, from SPDX identifiers.

Identifiers are normalised (lowercase, ``-or-later`` / ``-only`` / ``+``
stripped) before being checked against the built-in OSI-approved list.
"""

from __future__ import annotations

from collections.abc import Iterable

# Source: https://opensource.org/licenses/
OSI_APPROVED: frozenset[str] = frozenset({
    "0bsd", "aal", "afl-3.0", "agpl-3.0", "apache-1.1", "apache-2.0",
    "apsl-2.0", "artistic-1.0", "artistic-2.0", "blueoak-1.0.0",
    "bsd-1-clause", "bsd-2-clause", "bsd-2-clause-patent", "bsd-3-clause",
    "bsd-3-clause-lbnl", "bsl-1.0", "cal-1.0", "cal-1.0-combined-work-exception",
    "catosl-1.1", "cern-ohl-p-2.0", "cern-ohl-s-2.0", "cern-ohl-w-2.0",
    "cnri-python", "cpal-1.0", "cua-opl-1.0", "ecl-1.0", "ecl-2.0", "ecos-2.0",
    "efl-1.0", "efl-2.0", "entessa", "epl-1.0", "epl-2.0", "eupl-1.1",
    "eupl-1.2", "fair", "frameworx-1.0", "gpl-2.0", "gpl-3.0", "hpnd", "intel",
    "ipa", "ipl-1.0", "isc", "jam", "lgpl-2.0", "lgpl-2.1", "lgpl-3.0",
    "liliq-p-1.1", "liliq-r-1.1", "liliq-rplus-1.1", "lpl-1.0", "lpl-1.02",
    "lppl-1.0", "lppl-1.1", "lppl-1.2", "lppl-1.3a", "lppl-1.3c", "mit",
    "mit-0", "mit-modern-variant", "motosoto", "mpl-1.0", "mpl-1.1", "mpl-2.0",
    "ms-pl", "ms-rl", "mulanpsl-2.0", "multics", "nasa-1.3", "ncsa", "ngpl",
    "nokia", "nposl-3.0", "ntp", "oclc-2.0", "ofl-1.0", "ofl-1.1", "ogtsl",
    "oldap-2.8", "oset-pl-2.1", "osl-1.0", "osl-1.1", "osl-2.0", "osl-2.1",
    "osl-3.0", "php-3.0", "php-3.01", "postgresql", "python-2.0", "qpl-1.0",
    "rpl-1.1", "rpl-1.5", "rpsl-1.0", "rscpl", "simpl-2.0", "sissl",
    "sleepycat", "spl-1.0", "ucl-1.0", "unicode-dfs-2016", "unlicense",
    "upl-1.0", "vsl-1.0", "w3c", "watcom-1.0", "xnet", "zlib", "zpl-2.0",
    "zpl-2.1",
})


def normalize_spdx(identifier: str) -> str:
    """``"GPL-3.0-or-later"`` → ``"gpl-3.0"``."""
    s = identifier.strip().lower()
    s = s.removesuffix("-or-later")
    s = s.removesuffix("-only")
    return s.removesuffix("+")


def is_osi_approved(identifier: str) -> bool:
    return normalize_spdx(identifier) in OSI_APPROVED


def classify(licenses: Iterable[str]) -> bool | None:
    """True if every license is OSI-approved, False if any is not.

    None when there is nothing to classify.
    """
    items = [lic for lic in licenses if lic.strip()]
    if not items:
        return None
    return all(is_osi_approved(lic) for lic in items)
