"""
Prompt template loader
"""
from pathlib import Path
from typing import Dict, Optional
from immidraft.utils.logger import get_logger

logger = get_logger(__name__)


class PromptLoader:
    """Loads prompt templates from ``immidraft/prompts/<sub_dir>/<name>.txt``"""

    def __init__(self, prompts_dir: Optional[Path] = None):
        """
        Args:
            prompts_dir: prompts directory (defaults to the bundled one)
        """
        if prompts_dir is None:
            prompts_dir = Path(__file__).parent.parent / "prompts"

        self.prompts_dir = prompts_dir
        self._cache: Dict[str, str] = {}
        logger.debug(f"Prompt directory: {self.prompts_dir}")

    def load_prompt(self, template_name: str, sub_dir: str) -> Optional[str]:
        """
        Load a prompt template

        Args:
            template_name: file name without extension (e.g. "with_sample")
            sub_dir: sub directory (e.g. "letter")

        Returns:
            template text or None when the file is missing
        """
        cache_key = f"{sub_dir}/{template_name}"
        if cache_key in self._cache:
            return self._cache[cache_key]

        prompt_path = self.prompts_dir / sub_dir / f"{template_name}.txt"
        if not prompt_path.exists():
            logger.warning(f"Prompt file not found: {prompt_path}")
            return None

        with open(prompt_path, 'r', encoding='utf-8') as f:
            content = f.read()

        self._cache[cache_key] = content
        logger.debug(f"Prompt loaded: {cache_key}")
        return content

    def render(self, template_name: str, sub_dir: str, **values) -> str:
        """
        Load a template and fill its ``{placeholders}``

        Raises:
            FileNotFoundError: when the template does not exist
        """
        template = self.load_prompt(template_name, sub_dir)
        if template is None:
            raise FileNotFoundError(f"Prompt template not found: {sub_dir}/{template_name}")
        return template.format(**values)


# Global prompt loader instance
prompt_loader = PromptLoader()
