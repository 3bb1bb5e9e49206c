# -*- coding: utf-8 -*-
"""gcp_secretmanager_certcache a certificate cache backed by GCP Secret Manager.

Stores TLS certificates and private keys handed over by an automatic certificate
provisioning client as secrets, one secret per key, keeping only the latest version.

"""

import setuptools
import re
from io import open

VERSIONFILE="gcp_secretmanager_certcache/_version.py"
verstrline = open(VERSIONFILE, "rt").read()
VSRE = r"^__version__ = ['\"]([^'\"]*)['\"]"
mo = re.search(VSRE, verstrline, re.M)
if mo:
    verstr = mo.group(1)
else:
    raise RuntimeError("Unable to find version string in %s." % (VERSIONFILE,))

with open("README.md", "r", encoding='utf-8') as fh:
    long_description = fh.read()

setuptools.setup(
    name='gcp_secretmanager_certcache',
    version=verstr,
    author="Mike Moore",
    author_email="z_z_zebra@yahoo.com",
    description="A certificate cache that persists certificates and keys in google cloud platform secret manager keeping only the latest version",
    long_description_content_type="text/markdown",
    long_description=long_description,
    url="https://github.com/Mikemoore63/gcp-secretmanager-certcache",
    packages=setuptools.find_packages(),
    include_package_data=True,
    license="MIT",
    scripts=[],
    python_requires=">=3.7",
    install_requires=[
        "google-cloud-secret-manager~=2.0",
        "google-api-core>=1.0,<3.0",
        "google-auth>1.0,<3.0",
        "google-crc32c~=1.0",
        "grpcio~=1.0"
    ],
    extras_require={
        "test": ["pytest"],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],

)
