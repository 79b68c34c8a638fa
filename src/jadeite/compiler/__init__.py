"""Compiler package: tree preprocessing and PHP code generation.

Submodules:
    core: Compiler, CompileContext and node dispatch
    preprocess: import, block and mixin passes
    elements, attributes, control, mixins: code generation per node family
    interpolation: ``#{}``/``!{}``/``#[]``/``![]`` expansion
    formatter: pretty printing and delimiters
    resolver: template path resolution
    runtime: PHP helper functions used by compiled templates
"""

from jadeite.compiler.core import CompileContext, Compiler
from jadeite.compiler.resolver import PathResolver
from jadeite.compiler.runtime import RUNTIME_FUNCTIONS, render_runtime

__all__ = [
    "CompileContext",
    "Compiler",
    "PathResolver",
    "RUNTIME_FUNCTIONS",
    "render_runtime",
]
