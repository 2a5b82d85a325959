# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="liszp",
    version="0.1.0",
    description="A small Lisp with a self-hosted standard library built on defmacro and quasiquote",
    python_requires=">=3.10",
    packages=find_namespace_packages(include=["liszp", "liszp.*", "liszp_lsp", "liszp_lsp.*"]),
    package_data={"liszp": ["prelude/*.lisp"]},
    install_requires=[
        "pygls>=1.1,<2",
        "lsprotocol",
    ],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": [
            "liszp=liszp.__main__:main",
            "liszp-ls=liszp_lsp.server:main",
        ],
    },
    zip_safe=False,
)
