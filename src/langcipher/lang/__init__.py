from .model import LanguageModel

__all__ = ["LanguageModel"]
