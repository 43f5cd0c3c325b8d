# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="levellog",
    version="0.1.0",
    description="Leveled logger with stream and database targets and a line parser",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["levellog*"]),
    python_requires=">=3.8",
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'levellog=levellog.interface.cli.app:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
