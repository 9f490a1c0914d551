import importlib.util
import os
import sys

# Put project root on sys.path so autodoc can import the package if needed
sys.path.insert(0, os.path.abspath("../.."))

project = "surveysize"
author = "surveysize contributors"

extensions = [
    "autoapi.extension",
    "sphinx.ext.doctest",
    "sphinx.ext.napoleon",
    "myst_nb",
    "sphinx_copybutton",
]
templates_path = []
exclude_patterns = []

nb_execution_mode = "off"

# Book-style layout when the theme is installed, bundled alabaster otherwise.
if importlib.util.find_spec("sphinx_book_theme") is not None:
    html_theme = "sphinx_book_theme"
    html_theme_options = {
        "use_repository_button": False,
        "path_to_docs": "docs/source",
    }
else:
    html_theme = "alabaster"
    html_theme_options = {}

myst_enable_extensions = [
    "deflist",
    "colon_fence",
]

master_doc = "index"

# ---------------------------------------------------------------------------
# sphinx-autoapi: generate API reference for the `surveysize` package
# ---------------------------------------------------------------------------
autoapi_type = "python"
# Restrict autoapi to the package source directory so it doesn't scan the
# virtualenv or the test suite.
autoapi_dirs = ["../../surveysize"]

autoapi_ignore = [
    "**/tests/**",
    "**/.venv/**",
    "**/__pycache__/**",
]

autodoc_typehints = "description"

autoapi_options = [
    "members",
    "undoc-members",
    "show-inheritance",
    "show-module-summary",
]

autoapi_python_class_content = "both"
