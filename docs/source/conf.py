"""Sphinx configuration for the PySATL Proba API reference."""

import sys
from datetime import date
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

SRC = Path(__file__).resolve().parents[2] / "src"
sys.path.insert(0, str(SRC))

project = "PySATL Proba"
author = "Leonid Elkin, Mikhail Mikhailov, Fedor Myznikov"
copyright = f"{date.today().year}, PySATL project"
try:
    release = version("pysatl-proba")
except PackageNotFoundError:
    release = "0.1.0"

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.autosummary",
    "sphinx.ext.napoleon",
    "sphinx.ext.mathjax",
    "sphinx.ext.intersphinx",
    "sphinx.ext.viewcode",
    "sphinx.ext.doctest",
    "sphinx_autodoc_typehints",
]
autosummary_generate = True
exclude_patterns = ["_build"]

# NumPy docstrings only
napoleon_google_docstring = False
napoleon_numpy_docstring = True
napoleon_preprocess_types = True
napoleon_use_rtype = True

autodoc_member_order = "bysource"
autodoc_default_options = {
    "undoc-members": True,
    "show-inheritance": True,
}
autodoc_typehints = "description"

# PEP 695 aliases and names imported under TYPE_CHECKING
autodoc_type_aliases = {
    "NumericArray": "pysatl_proba.types.NumericArray",
    "Number": "pysatl_proba.types.Number",
    "Sample": "pysatl_proba.distributions.sampling.Sample",
    "Distribution": "pysatl_proba.distributions.distribution.Distribution",
    "Parametrization": "pysatl_proba.families.parametrizations.Parametrization",
    "MonteCarloConfig": "pysatl_proba.montecarlo.config.MonteCarloConfig",
    "Experiment": "pysatl_proba.montecarlo.simulation.Experiment",
    "Bins": "pysatl_proba.histograms.Bins",
    "Axes": "matplotlib.axes.Axes",
}

intersphinx_mapping = {
    "python": ("https://docs.python.org/3", None),
    "numpy": ("https://numpy.org/doc/stable/", None),
    "scipy": ("https://docs.scipy.org/doc/scipy/", None),
    "matplotlib": ("https://matplotlib.org/stable/", None),
}

html_theme = "sphinx_rtd_theme"
html_title = "PySATL Proba"
html_theme_options = {"navigation_depth": 3}
