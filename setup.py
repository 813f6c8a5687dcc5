from setuptools import setup

setup(
    name="expropt",
    version="0.1",
    description="Rule-based pattern rewriting for addition expressions",
    install_requires=["sexpdata", "numpy", "prettyprinter", "pyrsistent"],
    extras_require={"test": ["pytest"]},
    package_dir={"": "src/python"},
    packages=["expropt"],
    python_requires=">=3.8",
)
