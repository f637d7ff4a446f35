from .revisualise_prompt import PROMPT_REVISUALISE_DEFAULT

__all__ = [
    "PROMPT_REVISUALISE_DEFAULT",
]
