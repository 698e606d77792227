"""
Visa type settings
Spelling variants of visa classifications and their canonical tags
"""
from typing import Dict, List, Tuple


# Checked top to bottom against the upper-cased input; first prefix match wins
VISA_TYPE_ALIASES: List[Tuple[Tuple[str, ...], str]] = [
    (("EB-1", "EB1"), "EB1"),
    (("EB-2", "EB2"), "EB2"),
    (("EB-3", "EB3"), "EB3"),
    (("O-1", "O1"), "O1"),
    (("L-1", "L1"), "L1"),
    (("H-1B", "H1B"), "H1B"),
    (("P-1", "P1"), "P1"),
    (("P-3", "P3"), "P3"),
]

# Visa families searched when a visa type has no samples of its own
VISA_FAMILY_PREFIXES: List[str] = ["EB", "O", "L", "H"]

# Visa types offered by the case intake form
SUPPORTED_VISA_TYPES: Dict[str, str] = {
    "O-1A": "Individuals with extraordinary ability in sciences, education, business or athletics",
    "O-1B": "Individuals with extraordinary ability in the arts or motion picture industry",
    "EB-1A": "Employment-based first preference, extraordinary ability",
    "EB-1B": "Outstanding professors and researchers",
    "EB-2 NIW": "National interest waiver",
    "H-1B": "Specialty occupation",
    "L-1A": "Intracompany transferee, executive or manager",
    "P-1": "Internationally recognized athletes and entertainers",
}
