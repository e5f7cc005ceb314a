"""
Setup script for party-host package with optional Cython compilation.

Set PARTY_HOST_CYTHON=1 to build the internal modules (_core, _session)
as compiled extensions, while keeping the public API (host.py, config.py,
types.py, errors.py) as readable Python source.
"""

from setuptools import setup, find_packages, Extension
import os

# Cython is opt-in
USE_CYTHON = os.environ.get("PARTY_HOST_CYTHON", "").lower() in ("1", "true", "yes")
if USE_CYTHON:
    try:
        from Cython.Build import cythonize
    except ImportError:
        USE_CYTHON = False
        print("Cython not found. Building without compilation (source only).")

# Internal modules to compile with Cython
CYTHON_MODULES = [
    "src/party_host/_core/bid_validator.py",
    "src/party_host/_core/turn_sequencer.py",
    "src/party_host/_core/reducer.py",
    "src/party_host/_core/masking.py",
    "src/party_host/_core/handlers/higher_lower.py",
    "src/party_host/_core/handlers/cachito.py",
    "src/party_host/_core/handlers/general.py",
    "src/party_host/_session/grace_tracker.py",
    "src/party_host/_session/registry.py",
    "src/party_host/_session/session_manager.py",
]


def get_extensions():
    """Build Extension objects for Cython compilation."""
    if not USE_CYTHON:
        return []

    extensions = []
    for module_path in CYTHON_MODULES:
        if os.path.exists(module_path):
            # Convert path to module name: src/party_host/_core/x.py -> party_host._core.x
            module_name = module_path.replace("src/", "").replace("/", ".").replace(".py", "")
            extensions.append(
                Extension(
                    name=module_name,
                    sources=[module_path],
                )
            )
    return extensions


def get_ext_modules():
    """Get extension modules, cythonized if Cython is enabled."""
    extensions = get_extensions()
    if not extensions:
        return []

    return cythonize(
        extensions,
        compiler_directives={
            "language_level": "3",
            "boundscheck": False,
            "wraparound": False,
        },
        nthreads=os.cpu_count() or 1,
    )


ext_modules = get_ext_modules() if USE_CYTHON else []

setup(
    name="party-host",
    version="1.0.0",
    description="Authoritative room host for Higher-or-Lower, Cachito and General party games",
    author="Party Host Developers",
    license="MIT",
    python_requires=">=3.10",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    ext_modules=ext_modules,
    install_requires=[
        "python-dotenv>=1.0.0",
        "pydantic>=2.5.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
        "dev": [
            "cython>=3.0",
            "build",
            "wheel",
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "party-host=party_host.cli:main",
        ],
    },
    # Include compiled .so/.pyd files in the package
    package_data={
        "party_host": ["*.so", "*.pyd"],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Cython",
    ],
)
