"""
Expert letter prompt builder

Builds drafting prompts, injecting sample letters when one is available.
"""
from typing import Iterable, Optional
from immidraft.services.prompt_loader import prompt_loader
from immidraft.services.sample_letters import sample_letter_service, SampleLetterService
from immidraft.types import Evidence
from immidraft.utils.logger import get_logger

logger = get_logger(__name__)

NO_EVIDENCE = "No evidence provided."


def _numbered_section(title: str, items) -> str:
    lines = [f"{title}:"]
    lines.extend(f"{index}. {item}" for index, item in enumerate(items, start=1))
    return "\n".join(lines) + "\n\n"


def format_evidence(evidence: Optional[Evidence]) -> str:
    """
    Render summarized evidence as prompt text

    Args:
        evidence: applicant/expert info and evidence lists

    Returns:
        formatted sections, or "No evidence provided." when empty
    """
    if not evidence:
        return NO_EVIDENCE

    formatted = ""

    applicant = evidence.get("applicant")
    if applicant:
        formatted += "APPLICANT INFORMATION:\n"
        formatted += f"Name: {applicant.get('name') or 'Not provided'}\n"
        formatted += f"Field: {applicant.get('field') or 'Not provided'}\n"
        formatted += f"Current Position: {applicant.get('position') or 'Not provided'}\n"
        formatted += "\n"

    expert = evidence.get("expert")
    if expert:
        formatted += "EXPERT INFORMATION:\n"
        formatted += f"Name: {expert.get('name') or 'Not provided'}\n"
        formatted += f"Credentials: {expert.get('credentials') or 'Not provided'}\n"
        formatted += f"Position: {expert.get('position') or 'Not provided'}\n"
        formatted += f"Relationship to Applicant: {expert.get('relationship') or 'None'}\n"
        formatted += "\n"

    for key, title in (("achievements", "ACHIEVEMENTS"),
                       ("publications", "PUBLICATIONS"),
                       ("awards", "AWARDS")):
        items = evidence.get(key)
        if isinstance(items, list):
            formatted += _numbered_section(title, items)

    if evidence.get("other"):
        formatted += f"ADDITIONAL EVIDENCE:\n{evidence['other']}\n\n"

    return formatted or NO_EVIDENCE


class LetterPromptBuilder:
    """Builds expert letter prompts"""

    def __init__(self, samples: SampleLetterService = None):
        self.samples = samples or sample_letter_service

    def build_fallback_prompt(self, visa_type: str, evidence: Optional[Evidence] = None) -> str:
        """Prompt used when no sample letter is available"""
        return prompt_loader.render(
            "fallback", "letter",
            visa_type=visa_type,
            evidence=format_evidence(evidence)
        )

    def build_prompt_with_sample(
        self,
        visa_type: str,
        tags: Optional[Iterable[str]] = None,
        evidence: Optional[Evidence] = None
    ) -> dict:
        """
        Prompt with the best matching sample letter injected

        Falls back to samples of the same visa family, then to the
        sample-free prompt.

        Returns:
            dict with ``prompt``, ``sample_id`` and ``prompt_type``
        """
        sample = self.samples.get_best_sample(visa_type, tags, fallback_to_family=True)

        if sample is None:
            logger.info(f"No sample letter for {visa_type}, using fallback prompt")
            return {
                "prompt": self.build_fallback_prompt(visa_type, evidence),
                "sample_id": None,
                "prompt_type": "fallback",
            }

        prompt = prompt_loader.render(
            "with_sample", "letter",
            visa_type=visa_type,
            sample_content=sample.get("content", "").strip(),
            evidence=format_evidence(evidence)
        )
        return {"prompt": prompt, "sample_id": sample.get("id"), "prompt_type": "sample"}

    def build_prompt_with_multiple_samples(
        self,
        visa_type: str,
        sample_count: int = 3,
        evidence: Optional[Evidence] = None
    ) -> dict:
        """
        Prompt with up to ``sample_count`` samples of the visa type

        Returns:
            dict with ``prompt``, ``sample_ids`` and ``prompt_type``
        """
        samples = self.samples.get_samples_by_visa_type(visa_type)[:max(sample_count, 0)]

        if not samples:
            return {
                "prompt": self.build_fallback_prompt(visa_type, evidence),
                "sample_ids": [],
                "prompt_type": "fallback",
            }

        blocks = "".join(
            f"SAMPLE {index}:\n===\n{sample.get('content', '').strip()}\n===\n\n"
            for index, sample in enumerate(samples, start=1)
        )
        prompt = prompt_loader.render(
            "multiple_samples", "letter",
            visa_type=visa_type,
            sample_count=len(samples),
            samples=blocks,
            evidence=format_evidence(evidence)
        )
        return {
            "prompt": prompt,
            "sample_ids": [sample.get("id") for sample in samples],
            "prompt_type": "multiple_samples",
        }


# Global prompt builder instance
letter_prompt_builder = LetterPromptBuilder()
