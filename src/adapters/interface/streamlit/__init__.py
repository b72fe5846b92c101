"""Streamlit payment form package."""

__all__ = []
