"""Montagem de prompts do gerador de fluxos."""

from ai.prompts.flow_generator_prompt import FLOW_GENERATOR_PROMPT_FILE, build_flow_prompts

__all__ = [
    "FLOW_GENERATOR_PROMPT_FILE",
    "build_flow_prompts",
]
