from setuptools import setup, find_packages

setup(
    name="odesim",
    version="0.1.0",
    description="Fixed-step ODE simulation engine for SIR, logistic and projectile models, exposed as a chat tool",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.11",
    install_requires=[
        "anthropic>=0.50.0",
        "pydantic>=2.0",
        "scipy>=1.12.0",
        "numpy>=1.26.0",
        "streamlit>=1.35.0",
        "plotly>=5.20.0",
    ],
    extras_require={
        "dev": ["pytest>=8.0.0"],
    },
    entry_points={
        "console_scripts": [
            "odesim=odesim.core.orchestrator:main",
        ],
    },
)
