r"""@package transcend.funcs

Implementations of the transcendental functions.

Each module provides the public function (e.g. log.log()) dispatching to one
of several strategies, which may also be called directly.
"""
