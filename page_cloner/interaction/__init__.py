"""Обёртка над CDP (Chrome DevTools Protocol) для операций со страницей."""

from .page import Page

__all__ = ['Page']
