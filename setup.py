from setuptools import setup, find_namespace_packages
from os import path

requires = [
    # click has been known to publish non-backwards compatible minors in the past (removed deprecated code in 8.1.0)
    "click>=8.0,<9",
    "colorlog~=6.4",
    "ply~=3.0",
    "pydantic>=2,<3",
]


# read the contents of your README file
this_directory = path.abspath(path.dirname(__file__))
with open(path.join(this_directory, "README.md"), encoding="utf-8") as f:
    long_description = f.read()

version = "1.0.0"

setup(
    version=version,
    python_requires=">=3.9",  # also update classifiers
    # Meta data
    name="typedecl",
    description="Parser for type declarations of template parameters",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="Inmanta",
    author_email="code@inmanta.com",
    license="Apache Software License 2",
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Compilers",
        "Programming Language :: Python :: 3.9",
    ],
    keywords="parser types templates compiler",
    # Packaging
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src"),
    # https://www.python.org/dev/peps/pep-0561/#packaging-type-information
    zip_safe=False,
    include_package_data=True,
    install_requires=requires,
    extras_require={
        "test": ["pytest", "more-itertools>=8,<11"],
    },
    entry_points={
        "console_scripts": [
            "typedecl = typedecl.app:main",
        ],
    },
)
