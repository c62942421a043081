from setuptools import setup, find_packages

setup(
    name="vatsim-status-parser",
    version="0.1.0",
    description="VATSIM Status File Parser - Parses legacy VATSIM data.txt status files into validated records",
    author="VATSIM status parser contributors",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["main"],
    python_requires=">=3.8",
    install_requires=[],
    extras_require={
        'test': ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'vatsim-status=main:main',
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Games/Entertainment :: Simulation",
        "Topic :: Text Processing",
        "Environment :: Console",
        "Operating System :: OS Independent",
    ],
)
