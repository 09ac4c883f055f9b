from setuptools import setup, find_packages
from pathlib import Path

setup(
    name="sbxai_annotation",
    version=Path("./sbxai_annotation/VERSION").read_text().strip(),
    packages=find_packages(include=["sbxai_annotation", "sbxai_annotation.*"]),
    package_data={"sbxai_annotation": ["VERSION"]},
    python_requires=">=3.8",
    install_requires=[
        "requests",
        "numpy",
        "opencv-python-headless",
        "easydict",
        "tqdm",
    ],
    extras_require={"test": ["pytest"]},
    entry_points={
        "console_scripts": ["sbxai_annotation=sbxai_annotation.cli:main"],
    },
)
