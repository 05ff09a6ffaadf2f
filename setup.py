from setuptools import setup, find_packages

setup(
    name="strace-ebpf",
    version="0.1.0",
    description="Command-line front end of an eBPF based syscall tracer",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    entry_points={
        'console_scripts': [
            'strace-ebpf=cli.main:main',
        ],
    },
    python_requires='>=3.8',
    install_requires=[],
    extras_require={
        "test": [
            "pytest",
        ],
    },
)
