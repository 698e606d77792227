"""
Expert letter drafting (LetterAI)
"""
from typing import Any, Dict, Iterable, Optional
from immidraft.services.gpt_client import gpt_client
from immidraft.services.letter_prompt_builder import letter_prompt_builder
from immidraft.services.prompt_loader import prompt_loader
from immidraft.types import Evidence
from immidraft.utils.exceptions import InvalidInputError
from immidraft.utils.logger import get_logger, log_execution_time

logger = get_logger(__name__)


class LetterDrafter:
    """Drafts expert opinion letters from summarized evidence"""

    def __init__(self):
        self.gpt_client = gpt_client

    @log_execution_time()
    def draft_expert_letter(
        self,
        visa_type: str,
        tags: Optional[Iterable[str]] = None,
        evidence: Optional[Evidence] = None,
        sample_count: int = 1
    ) -> Dict[str, Any]:
        """
        Draft an expert letter

        Args:
            visa_type: petition visa type
            tags: tags used to pick the sample letter
            evidence: summarized evidence
            sample_count: number of samples to show the model (1 picks the best match)

        Returns:
            dict with ``content``, ``sample_ids``, ``prompt_type`` and ``usage``
        """
        if not visa_type or not visa_type.strip():
            raise InvalidInputError("visa type is required", "visa_type")

        if sample_count > 1:
            built = letter_prompt_builder.build_prompt_with_multiple_samples(
                visa_type, sample_count, evidence
            )
            sample_ids = built["sample_ids"]
        else:
            built = letter_prompt_builder.build_prompt_with_sample(visa_type, tags, evidence)
            sample_ids = [built["sample_id"]] if built["sample_id"] else []

        system_prompt = prompt_loader.load_prompt("system", "letter")
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt.strip()})
        messages.append({"role": "user", "content": built["prompt"]})

        response = self.gpt_client.chat_completion(
            messages=messages,
            temperature=0.7,
            max_tokens=2000
        )

        logger.info(
            f"Expert letter drafted: visa_type={visa_type}, prompt_type={built['prompt_type']}"
        )
        return {
            "content": (response["content"] or "").strip(),
            "sample_ids": sample_ids,
            "prompt_type": built["prompt_type"],
            "usage": response.get("usage"),
        }


# Global letter drafter instance
letter_drafter = LetterDrafter()
