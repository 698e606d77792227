"""
Sample-letter selector

Picks the stored sample letter that best matches a visa type and a set of
free-text tags. Samples are loaded once from ``immidraft/data/sample_letters.yaml``.
"""
import random
from pathlib import Path
from typing import Iterable, List, Optional
import yaml
from config.visa_types import VISA_TYPE_ALIASES, VISA_FAMILY_PREFIXES
from immidraft.types import SampleLetter
from immidraft.utils.logger import get_logger

logger = get_logger(__name__)

SAMPLES_FILE = Path(__file__).parent.parent / "data" / "sample_letters.yaml"


def normalize_visa_type(visa_type: Optional[str]) -> str:
    """
    Map visa type spelling variants to a canonical tag

    "EB-1A", "EB1" and "eb1" all become "EB1". Unknown values are
    returned stripped but otherwise unchanged.

    Args:
        visa_type: visa type as entered

    Returns:
        canonical visa type ("" for empty input)
    """
    if not visa_type:
        return ""

    visa_type = visa_type.strip()
    upper_type = visa_type.upper()

    for prefixes, canonical in VISA_TYPE_ALIASES:
        if upper_type.startswith(prefixes):
            return canonical

    return visa_type


def visa_family(visa_type: Optional[str]) -> Optional[str]:
    """Family prefix ("EB", "O", "L", "H") of a visa type, if any"""
    normalized = normalize_visa_type(visa_type)
    for prefix in VISA_FAMILY_PREFIXES:
        if normalized.startswith(prefix):
            return prefix
    return None


def _normalize_tags(tags: Optional[Iterable[str]]) -> set:
    return {str(tag).strip().lower() for tag in (tags or []) if tag is not None and str(tag).strip()}


def score_sample(sample: SampleLetter, tags: Optional[Iterable[str]]) -> int:
    """
    Number of query tags the sample carries (case-insensitive)

    Args:
        sample: sample letter record
        tags: query tags

    Returns:
        size of the tag intersection
    """
    return len(_normalize_tags(sample.get("tags")) & _normalize_tags(tags))


def select_best_sample(
    samples: List[SampleLetter],
    visa_type: Optional[str],
    tags: Optional[Iterable[str]] = None,
    fallback_to_family: bool = False
) -> Optional[SampleLetter]:
    """
    Pick the highest-scoring sample for a visa type

    Candidates are the samples whose normalized visa type equals the
    normalized query. Ties keep list order. With ``fallback_to_family``,
    an empty candidate list is widened to samples of the same visa family.

    Args:
        samples: sample letters to choose from
        visa_type: requested visa type
        tags: query tags
        fallback_to_family: widen to the visa family when nothing matches

    Returns:
        best sample, or None when no candidate exists
    """
    normalized_type = normalize_visa_type(visa_type)
    if not normalized_type:
        return None

    candidates = [
        sample for sample in samples
        if normalize_visa_type(sample.get("visa_type")) == normalized_type
    ]

    if not candidates and fallback_to_family:
        family = visa_family(normalized_type)
        if family:
            candidates = [
                sample for sample in samples
                if normalize_visa_type(sample.get("visa_type")).startswith(family)
            ]
            logger.info(
                f"No samples for {normalized_type}, using {len(candidates)} {family} family samples"
            )

    if not candidates:
        return None

    # sorted() is stable, so equal scores keep list order
    ranked = sorted(candidates, key=lambda sample: score_sample(sample, tags), reverse=True)
    return ranked[0]


def load_samples(path: Path = SAMPLES_FILE) -> List[SampleLetter]:
    """
    Load sample letters from YAML

    Args:
        path: YAML file with a top-level ``samples`` list

    Returns:
        sample letter records
    """
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    samples = data.get("samples", [])
    if not isinstance(samples, list):
        raise ValueError(f"'samples' must be a list in {path}")

    logger.info(f"Loaded {len(samples)} sample letters")
    return samples


class SampleLetterService:
    """Read access to the bundled sample letters"""

    def __init__(self, samples: Optional[List[SampleLetter]] = None):
        self._samples = samples

    @property
    def samples(self) -> List[SampleLetter]:
        if self._samples is None:
            self._samples = load_samples()
        return self._samples

    def get_all_samples(self) -> List[SampleLetter]:
        return list(self.samples)

    def get_samples_by_visa_type(self, visa_type: str) -> List[SampleLetter]:
        normalized_type = normalize_visa_type(visa_type)
        return [
            sample for sample in self.samples
            if normalize_visa_type(sample.get("visa_type")) == normalized_type
        ]

    def get_best_sample(
        self,
        visa_type: str,
        tags: Optional[Iterable[str]] = None,
        fallback_to_family: bool = False
    ) -> Optional[SampleLetter]:
        return select_best_sample(self.samples, visa_type, tags, fallback_to_family)

    def get_sample_by_id(self, sample_id: str) -> Optional[SampleLetter]:
        return next((s for s in self.samples if s.get("id") == sample_id), None)

    def get_random_sample(self, visa_type: str) -> Optional[SampleLetter]:
        samples = self.get_samples_by_visa_type(visa_type)
        return random.choice(samples) if samples else None


# Global sample letter service instance
sample_letter_service = SampleLetterService()
