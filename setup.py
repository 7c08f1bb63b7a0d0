from setuptools import find_namespace_packages, setup

setup(
    name="appsweep",
    version="0.1.0",
    description="Find the files a macOS application leaves behind outside its bundle.",
    python_requires=">=3.10",
    packages=find_namespace_packages(include=["appsweep", "appsweep.*"]),
    package_data={"appsweep.data": ["*.json"]},
    install_requires=[
        "result>=0.17",
        "rich>=13.7",
        "typer>=0.12",
    ],
    extras_require={
        "test": ["pytest>=8"],
    },
    entry_points={
        "console_scripts": ["appsweep=appsweep.cli.app:cli"],
    },
)
