# Configuration file for the Sphinx documentation builder.
#
# This file only contains a selection of the most common options. For a full
# list see the documentation:
# https://www.sphinx-doc.org/en/master/usage/configuration.html

# -- Path setup --------------------------------------------------------------

import os
import sys
sys.path.insert(0, os.path.abspath('..'))

import sphinx_rtd_theme


# -- Project information -----------------------------------------------------

project = 'hunaffix'
copyright = '2026, hunaffix authors'
author = 'hunaffix authors'


# -- General configuration ---------------------------------------------------

extensions = [
    'sphinx.ext.autodoc',
    'sphinx.ext.napoleon',
    'sphinx.ext.autodoc.typehints',
    'sphinx_rtd_theme',
]

autodoc_typehints = 'description'

autodoc_default_options = {
    'member-order': 'bysource'
}

# List of patterns, relative to source directory, that match files and
# directories to ignore when looking for source files.
exclude_patterns = ['_build', 'Thumbs.db', '.DS_Store']

add_module_names = False

# -- Options for HTML output -------------------------------------------------

html_theme = 'sphinx_rtd_theme'

modindex_common_prefix = ['hunaffix.', 'hunaffix.data.', 'hunaffix.readers.', 'hunaffix.algo.']
