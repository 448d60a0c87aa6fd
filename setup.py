from setuptools import setup, find_packages

setup(
    name="docmark",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    install_requires=[
        "beautifulsoup4",
        "markdownify>=1.0",
        "numpy",
        "pyyaml",
        "inquirer",
        "tqdm",
    ],
    extras_require={
        "dev": [
            "pytest",
            "pytest-cov",
            "black",
            "flake8",
        ],
    },
    entry_points={
        "console_scripts": [
            "docmark=docmark.__main__:main",
        ],
    },
    python_requires=">=3.8",
    description="Convert HTML, plain text, JSON, CSV, XML and DOCX documents to Markdown",
)
