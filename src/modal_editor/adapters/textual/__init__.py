"""Textual host for the modal editor."""

from .controller import TextualEditorAdapter, TextualUIHooks, translate_key

__all__ = ["TextualEditorAdapter", "TextualUIHooks", "translate_key"]
