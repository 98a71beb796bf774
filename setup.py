# python setup.py build_ext -i clean
import os
import sys

from Cython.Build import cythonize
from setuptools import Extension, setup

try:
    import numpy as np
except ImportError:
    raise RuntimeError(
        "NumPy is required to build this package. Please install it first."
    )

COMPILER_DIRECTIVES = {
    "language_level": 3,
    "annotation_typing": False,
    "binding": True,
    "embedsignature": True,
    "profile": False,
}

NUMPY_C_API = [
    ("NPY_NO_DEPRECATED_API", "NPY_1_9_API_VERSION")
]

PACKAGES = [
    "heapforest",
    "heapforest.binomial_heap",
    "heapforest.fibonacci_heap",
    "heapforest.tree",
    "heapforest.tree.binomial",
]

py_files = [
    (
        "heapforest.tree.binomial.binomial_tree",
        "heapforest/tree/binomial/binomial_tree.py"
    ),
    (
        "heapforest.binomial_heap.binomial_heap",
        "heapforest/binomial_heap/binomial_heap.py"
    ),
    (
        "heapforest.fibonacci_heap.fibonacci_heap",
        "heapforest/fibonacci_heap/fibonacci_heap.py"
    ),
]


def extensions_enabled() -> bool:
    """Compilation is skipped when HEAPFOREST_NO_EXTENSIONS is set."""
    return os.getenv("HEAPFOREST_NO_EXTENSIONS", "") in ("", "0")


def create_extensions(py_files: list[tuple]) -> list[Extension]:
    """
    Create Cython extension for all the heap modules.

    The modules are plain Python sources compiled in Cython's pure Python
    mode; the `.py` file stays importable when no extension is built.

    Parameters
    ----------
    py_files : list[tuple]
        A list of tuples. The first element of the tuple is the module in
        `Package.module` format. The second element is the `path` to the
        file.

    Returns
    -------
    list[Extension]
        A list of Cython extensions
    """
    extensions = []
    for module_name, py_path in py_files:
        extra_compile_args = [
            f"-D{name}={value}"
            for name, value in NUMPY_C_API
        ]
        if sys.platform != "win32":
            extra_compile_args.append("-O3")

        extension = Extension(
            name=module_name,
            sources=[py_path],
            include_dirs=[np.get_include()],
            extra_compile_args=extra_compile_args,
            language="c"
        )
        extensions.append(extension)
    return extensions


def main() -> None:
    """Main setup function for compiling"""
    files = [
        (name, path)
        for name, path in py_files
        if os.path.exists(path)
    ]

    if not files:
        raise RuntimeError("No heap modules found to compile")

    ext_modules = []
    if extensions_enabled():
        ext_modules = cythonize(
            create_extensions(files),
            compiler_directives=COMPILER_DIRECTIVES,
            language_level=3
        )

    setup(
        ext_modules=ext_modules,
        packages=PACKAGES,
        zip_safe=False
    )


if __name__ == "__main__":
    main()
