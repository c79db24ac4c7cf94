from .core import load_lang, make_translator

__all__ = ["load_lang", "make_translator"]
