#!/usr/bin/env python
import codecs

from setuptools import find_packages, setup


def read_files(*filenames):
    """
    Output the contents of one or more files to a single concatenated string.
    """
    output = []
    for filename in filenames:
        with codecs.open(filename, encoding="utf-8") as f:
            output.append(f.read())
    return "\n\n".join(output)


setup(
    name="django-fallback-images",
    version="1.0.0",
    description="Images that fall back through resized candidate URLs for Django",
    long_description=read_files("README.rst", "CHANGES.rst"),
    long_description_content_type="text/x-rst",
    platforms=["any"],
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    python_requires=">=3.10",
    install_requires=[
        "django>=4.2",
        "typing_extensions",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-django",
        ],
    },
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Environment :: Web Environment",
        "Framework :: Django",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: BSD License",
        "Operating System :: OS Independent",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Topic :: Software Development :: Libraries :: Application Frameworks",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
    zip_safe=False,
)
