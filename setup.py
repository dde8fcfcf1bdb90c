import setuptools


with open('README.md', 'r') as fh:
    long_description = fh.read()

setuptools.setup(
    name="seqmerge",
    version="0.3.0",
    description="Merge timestamped event batches into a time-ordered, re-indexed event store.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(exclude=("tests",)),
    python_requires=">=3.8",
    classifiers=(
        "Programming Language :: Python :: 3",
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Multimedia :: Sound/Audio :: MIDI",
        "Topic :: Software Development :: Libraries",
        "Topic :: Utilities",
    ),
    install_requires=[
        "PyYAML>=5.4",
        "websockets>=10.0",
    ],
    extras_require={
        "tests": [
            "pytest>=7.0",
        ],
    },
)
