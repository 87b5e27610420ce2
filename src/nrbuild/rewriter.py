import re

RESOURCES_SEGMENT = "resources"


def duplicated_resources_pattern(nodes_root_name: str) -> re.Pattern:
    """Match ``src``/``href`` values starting with ``/resources/<root>/resources/``."""
    return re.compile(
        r"""(src|href)=(["'])/{seg}/{root}/{seg}/""".format(
            seg=RESOURCES_SEGMENT,
            root=re.escape(nodes_root_name),
        )
    )


def needs_rewrite(html: str, nodes_root_name: str) -> bool:
    return duplicated_resources_pattern(nodes_root_name).search(html) is not None


def rewrite_asset_paths(html: str, nodes_root_name: str, package_name: str) -> str:
    """
    Point asset references at the path Node-RED serves package resources on.

    ``/resources/<root>/resources/x.js`` becomes ``/resources/<package>/x.js``.
    Other attributes are left alone, so rewriting twice changes nothing.
    """
    pattern = duplicated_resources_pattern(nodes_root_name)
    return pattern.sub(
        lambda m: f"{m.group(1)}={m.group(2)}/{RESOURCES_SEGMENT}/{package_name}/",
        html,
    )
