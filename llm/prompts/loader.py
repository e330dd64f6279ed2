"""Prompt loading and management."""

import yaml
from pathlib import Path
from typing import Dict, Any, Optional
from logger import get_logger

logger = get_logger()


class PromptManager:
    """Manages loading and rendering of prompts from YAML files."""

    def __init__(self, prompts_dir: Optional[Path] = None):
        """Initialize the prompt manager.

        Args:
            prompts_dir: Directory containing prompt YAML files.
                        Defaults to llm/prompts/ in the project.
        """
        if prompts_dir is None:
            self.prompts_dir = Path(__file__).parent
        else:
            self.prompts_dir = prompts_dir

        self._cache: Dict[str, Dict[str, Any]] = {}

    def load_prompt(self, prompt_name: str) -> Dict[str, Any]:
        """Load a prompt configuration from YAML file.

        Args:
            prompt_name: Name of the prompt file (without .yaml extension).

        Returns:
            Dictionary containing prompt configuration.

        Raises:
            FileNotFoundError: If prompt file doesn't exist.
            yaml.YAMLError: If YAML is invalid.
        """
        if prompt_name in self._cache:
            return self._cache[prompt_name]

        prompt_file = self.prompts_dir / f"{prompt_name}.yaml"

        if not prompt_file.exists():
            raise FileNotFoundError(f"Prompt file not found: {prompt_file}")

        logger.debug(f"Loading prompt from {prompt_file}")

        with open(prompt_file, "r", encoding="utf-8") as f:
            prompt_config = yaml.safe_load(f)

        self._cache[prompt_name] = prompt_config

        return prompt_config

    def render_system_prompt(self, prompt_name: str, variables: Dict[str, Any]) -> str:
        """Render the system prompt template of ``prompt_name``."""
        return self._render(prompt_name, "system_prompt_template", variables)

    def render_user_prompt(self, prompt_name: str, variables: Dict[str, Any]) -> str:
        """Render the user prompt template of ``prompt_name``."""
        return self._render(prompt_name, "user_prompt_template", variables)

    def parameters(self, prompt_name: str) -> Dict[str, Any]:
        """Return the model parameters declared by a prompt (e.g. max_tokens)."""
        return dict(self.load_prompt(prompt_name).get("parameters") or {})

    def version(self, prompt_name: str) -> str:
        return str(self.load_prompt(prompt_name).get("version", "unknown"))

    def _render(self, prompt_name: str, key: str, variables: Dict[str, Any]) -> str:
        template = self.load_prompt(prompt_name).get(key, "")

        # Simple string formatting; blank lines are dropped from the output
        rendered = template.format(**variables)
        return "\n".join(line for line in rendered.splitlines() if line.strip())


_default_manager: Optional[PromptManager] = None


def get_prompt_manager() -> PromptManager:
    """Return the shared PromptManager for the bundled prompts."""
    global _default_manager
    if _default_manager is None:
        _default_manager = PromptManager()
    return _default_manager
