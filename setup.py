from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="nestfs",
    version="0.1.0",
    author="Tim Hosking",
    author_email="github.com/Munger",
    description="A nested archive file system library for Python: archives are directories, at any depth",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/Munger/nestfs",
    project_urls={
        "Bug Tracker": "https://github.com/Munger/nestfs/issues",
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Topic :: System :: Filesystems",
        "Topic :: System :: Archiving",
    ],
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.8",
    install_requires=[
        "typing-extensions>=4.0",
        "filetype>=1.2.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
)
