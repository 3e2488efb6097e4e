"""Pattern algebra — compose and decompose a trailing path parameter.

A pattern follows the host mux's conventions: a trailing ``/`` means
"this subtree", no trailing slash means "exactly this path". Only
subtree (parametric) patterns take a parameter, the suffix of the request
path beyond the pattern.

Examples::

    compose("/hello/", "world")         -> "/hello/world"
    compose("/hello", "world")          -> "/hello"
    decompose("/hello/", "/hello/world") -> "world"
    decompose("/hello", "/hello/world")  -> ""

Host-qualified patterns (``example.com/hello/``) behave like their path
portion; the host is discarded. Every function here is total over
strings and never raises.
"""


def host_path(pattern: str) -> tuple[str, str]:
    """Split *pattern* into its host and path parts.

    ``"example.com/a/"`` -> ``("example.com", "/a/")``. A pattern without
    any slash is all host and no path.
    """
    if not pattern:
        return "", ""
    if pattern[0] == "/":
        return "", pattern
    host, sep, path = pattern.partition("/")
    if not sep:
        return pattern, ""
    return host, sep + path


def is_parametric(pattern: str) -> bool:
    """True if *pattern* matches a subtree and so takes a parameter."""
    _, path = host_path(pattern)
    return path.endswith("/")


def compose(pattern: str, value: str) -> str:
    """Build a path from *pattern* and parameter *value*.

    Fixed patterns take no parameter: the path portion is returned and
    *value* is ignored. The value is appended verbatim, without escaping.
    """
    _, path = host_path(pattern)
    if not path.endswith("/"):
        return path
    return path + value


def decompose(pattern: str, path: str) -> str:
    """Return the parameter of *pattern* carried by request *path*.

    Returns ``""`` when *pattern* is fixed or *path* is not below it. Pass
    the pattern the mux actually matched for the request, not one you
    registered: the two can differ for host-qualified routes.
    """
    _, prefix = host_path(pattern)
    if not prefix.endswith("/"):
        return ""
    if not path.startswith(prefix):
        return ""
    return path[len(prefix):]
