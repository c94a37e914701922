from setuptools import setup, find_packages

setup(
    name="terminal_minesweeper",
    version="0.1",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "pyyaml",
        "numpy",
        "windows-curses; platform_system == 'Windows'"
    ],
    entry_points={
        "console_scripts": [
            "tminesweeper=terminal.app:main"
        ]
    },
)
