from setuptools import setup, find_packages

setup(
    name="statesync",
    version="0.1.0",
    description="Delta-state CRDTs (grow-only set) for replicated state synchronization",
    author="adamfilli",
    packages=find_packages(include=["statesync", "statesync.*"]),
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    include_package_data=True,
    python_requires=">=3.11",
)
