from setuptools import setup, find_packages

def parse_requirements(requirements):
    with open(requirements) as f:
        return [l.strip('\n') for l in f if l.strip('\n') and not l.startswith('#')]

requirements = parse_requirements("requirements.txt")

setup(
    name='littlebugshop_client',
    version='0.1.0',
    install_requires=requirements,
    extras_require={
        "test": [
            "pytest-asyncio>=0.23",
        ],
    },
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.9",
    entry_points={
        "pytest11": [
            "littlebugshop=littlebugshop_client.pytest_plugin",
        ],
    }
)
