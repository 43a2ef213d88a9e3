"""
Core package for monorepo dashboard applications.

Submodules provide offline data preparation, cached loading of the cleaned
dataset, and the Streamlit rendering helpers orchestrated by `app.py`.
"""
