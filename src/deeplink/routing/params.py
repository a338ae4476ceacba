"""Parameter extraction for a matched template.

Binds ``{name}`` segments to the decoded values they matched, then merges
in the query string. All values stay strings.
"""

from collections.abc import Mapping, Sequence

from deeplink.routing.template import Parameter, UriTemplate


def extract_params(
    template: UriTemplate,
    segments: Sequence[str],
    query: Mapping[str, str],
) -> dict[str, str]:
    """Build the parameter map for a successful match.

    *segments* must be the decoded incoming path, the same length as
    ``template.path_segments``. Path parameters come first, in path order.
    Every query key follows in query order, including keys the template
    never declared, except a key already bound by the path: path values win.
    """
    params: dict[str, str] = {
        seg.name: value
        for seg, value in zip(template.path_segments, segments, strict=True)
        if isinstance(seg, Parameter)
    }
    for key, value in query.items():
        params.setdefault(key, value)
    return params
