"""Streamlit host surface for protected galleries."""
