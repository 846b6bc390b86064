"""Shared Streamlit UI building blocks."""
