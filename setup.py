from setuptools import setup, find_packages

setup(
    name="clipsplit",
    version="0.1.0",
    packages=find_packages(include=["clipsplit", "clipsplit.*"]),
    install_requires=[
        "ffmpeg-python",
        "rich>=13.0.0",  # Explicit minimum version
        "psutil",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-mock",
        ],
    },
    entry_points={
        "console_scripts": [
            "clipsplit=clipsplit.__main__:main",
        ],
    },
    python_requires=">=3.8",
)
