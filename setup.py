from setuptools import setup, find_packages

setup(
    name="treedash",
    version="0.1.0",
    packages=find_packages(include=["treedash", "treedash.*"]),
    description="Live, in-place terminal tree of status lines, spinners and progress bars.",
    python_requires=">=3.10",
    install_requires=[
        "colorama>=0.4.6",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "treedash=treedash.cli:main",
        ]
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
        "Environment :: Console",
    ],
)
