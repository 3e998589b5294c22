from setuptools import setup, find_packages

setup(
    name="change_select",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "pyyaml",
        # Semantic grouping (tree-sitter grammars)
        "tree-sitter>=0.25",
        "tree-sitter-rust",
        "tree-sitter-python",
        "tree-sitter-java",
        "tree-sitter-kotlin",
        "tree-sitter-hcl",
        "tree-sitter-markdown",
        "tree-sitter-yaml",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    python_requires=">=3.9",
    author="Uday Kanth",
    description="Tri-state change selection over file diffs with a syntax-aware view.",
)
