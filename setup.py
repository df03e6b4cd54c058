import os

from setuptools import setup, find_packages

version_file = os.path.join(os.path.dirname(__file__), "iunpack", "version.py")
with open(version_file, "r") as f:
    exec(f.read())

readme_file = os.path.join(os.path.dirname(__file__), "README.md")
with open(readme_file, "r") as f:
    long_description = f.read()

setup(
    name="iunpack",
    version=__version__,  # noqa: F821 -- loaded by 'exec' above
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    description=(
        "Destructure iterables against prefix/middle/suffix patterns, "
        "including single-pass suffix extraction from iterators."
    ),
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="MIT",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Topic :: Software Development :: Libraries",
    ],
    keywords="destructuring unpacking pattern matching iterator",
    python_requires=">=3.6",
    install_requires=[
        "sentinels",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "iunpack-match=iunpack.scripts.iunpack_match:main",
        ],
    },
)
