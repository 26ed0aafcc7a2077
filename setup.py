import setuptools

with open("README.rst", "r") as fh:
    long_description = fh.read()

setuptools.setup(
    name="hunaffix",
    version="0.1.0",
    author="hunaffix authors",
    description="Hunspell-compatible affix analysis in pure Python",
    long_description=long_description,
    long_description_content_type="text/x-rst",
    packages=setuptools.find_packages(exclude=["tests", "tests.*", "docs"]),
    extras_require={
        "test": ["pytest"],
        "docs": ["sphinx", "sphinx_rtd_theme"],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Intended Audience :: Science/Research",

        "License :: OSI Approved :: MIT License",

        "Programming Language :: Python :: 3.7",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",

        "Operating System :: OS Independent",

        "Topic :: Text Processing :: Linguistic"
    ],
    python_requires='>=3.7',
    keywords=["hunspell", "spelling", "spellcheck", "morphology", "affix"]
)
