from setuptools import setup, find_packages

setup(
    name="path-following-demo",
    version="1.0.0",
    description="Interactive path discretization and lookahead pursuit simulator",
    packages=find_packages(include=["pathdemo", "pathdemo.*"]),
    py_modules=["main", "doctor"],
    install_requires=[
        "pygame>=2.1.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "path-following-demo=main:main",
        ],
    },
    python_requires=">=3.8",
)
