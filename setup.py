import pathlib
import sys

from setuptools import find_packages, setup


__copyright__ = "Copyright 2024-date, The bigmds Project"
__license__ = "BSD-3"
__status__ = "Alpha"

# Check Python version, no point installing if unsupported version inplace
min_version = (3, 10)
if sys.version_info < min_version:
    py_version = ".".join(str(n) for n in sys.version_info)
    msg = (
        f"Python-{'.'.join(map(str, min_version))} or greater is required, "
        f"Python-{py_version} used."
    )
    raise RuntimeError(msg)


short_description = "Multidimensional scaling for big data"

readme_path = pathlib.Path(__file__).parent / "README.md"

long_description = readme_path.read_text()


PACKAGE_DIR = "src"

version_ns = {}
exec((pathlib.Path(__file__).parent / PACKAGE_DIR / "bigmds" / "_version.py").read_text(), version_ns)

setup(
    name="bigmds",
    version=version_ns["__version__"],
    description=short_description,
    long_description=long_description,
    long_description_content_type="text/markdown",
    platforms=["any"],
    license=__license__,
    keywords=[
        "multidimensional scaling",
        "principal coordinates",
        "dimension reduction",
        "procrustes",
        "statistics",
    ],
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: BSD License",
        "Topic :: Scientific/Engineering :: Mathematics",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    packages=find_packages(where="src"),
    package_dir={"": PACKAGE_DIR},
    python_requires=">=3.10",
    install_requires=[
        "numba>0.53",
        "numpy",
        "scitrack",
        "tqdm",
    ],
    extras_require={
        "test": [
            "nox",
            "pytest",
            "pytest-cov",
        ],
        "dev": [
            "black",
            "isort",
            "nox",
            "pytest",
            "pytest-cov",
        ],
    },
)
