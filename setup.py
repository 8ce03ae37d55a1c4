from setuptools import find_packages, setup

setup(
    name="oneormany",
    version="0.1",
    packages=find_packages("src"),
    package_dir={"": "src"},
    license="MIT License",
    description="A non-empty ordered collection which decodes from one value or many",
    python_requires=">=3.9",
    install_requires=[
        "attrs>=22.2.0",
        "pydantic>=2.6",
        "pyrsistent>=0.18.0",
        "returns>=0.22.0",
        "typing-extensions>=4.7.0",
    ],
    extras_require={
        "test": [
            "hypothesis>=6.0",
            "pytest>=7.0",
        ],
    },
)
