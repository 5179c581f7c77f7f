"""
hashup setup script
"""
#=============================================================================
# init script env -- ensure cwd = root of source dir
#=============================================================================
import os
root_dir = os.path.abspath(os.path.join(__file__, ".."))
os.chdir(root_dir)

#=============================================================================
# imports
#=============================================================================
import re

from setuptools import setup, find_packages

#=============================================================================
# version string
#=============================================================================

# read version string without importing hashup (and its dependencies)
with open(os.path.join(root_dir, "hashup", "__init__.py"), encoding="utf-8") as fh:
    version = re.search(r'^__version__ = "([^"]+)"', fh.read(), re.M).group(1)

#=============================================================================
# static text
#=============================================================================
SUMMARY = "hash, verify and migrate password hashes across pbkdf2, bcrypt, scrypt and plain digests"

DESCRIPTION = """\
hashup hashes a plaintext credential with a chosen cryptographic hashing
function, verifies a plaintext against a previously produced hash, and
migrates stored hashes from one function (or parameter set) to another
without ever storing the plaintext.

Every hash is a self-describing string: the algorithm, its parameters and
the salt are embedded, so a stored hash can always be verified even after
the default parameters change.
"""

KEYWORDS = """\
password secret hash security
pbkdf2 bcrypt scrypt pepper salt
migration rehash
"""

CLASSIFIERS = """\
Intended Audience :: Developers
License :: OSI Approved :: BSD License
Natural Language :: English
Operating System :: OS Independent
Programming Language :: Python :: 3
Programming Language :: Python :: Implementation :: CPython
Programming Language :: Python :: Implementation :: PyPy
Topic :: Security :: Cryptography
Topic :: Software Development :: Libraries
""".splitlines()

if '.dev' in version:
    CLASSIFIERS.append("Development Status :: 3 - Alpha")
else:
    CLASSIFIERS.append("Development Status :: 5 - Production/Stable")

#=============================================================================
# run setup
#=============================================================================
setup(
    # package info
    packages=find_packages(root_dir, include=["hashup", "hashup.*"]),
    zip_safe=True,
    python_requires=">=3.9",

    # metadata
    name="hashup",
    version=version,
    license="BSD",

    description=SUMMARY,
    long_description=DESCRIPTION,
    keywords=KEYWORDS,
    classifiers=CLASSIFIERS,

    install_requires=[
        "bcrypt>=3.1.0",
        "typing_extensions>=4.0",
    ],
    extras_require={
        "tests": [
            "pytest",
            "pytest-archon",
        ],
    },
)

#=============================================================================
# eof
#=============================================================================
