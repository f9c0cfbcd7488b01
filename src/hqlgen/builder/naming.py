"""Identifier casing for generated query names."""


def to_pascal_case(name: str) -> str:
    """
    Strict PascalCase: drop underscores and capitalize each segment.

    Only the first character of a segment changes, so the transform is
    idempotent: to_pascal_case(to_pascal_case(x)) == to_pascal_case(x).

    Examples:
        user_profile -> UserProfile
        Follows      -> Follows
        HTTPLog      -> HTTPLog
    """
    return "".join(part[:1].upper() + part[1:] for part in name.split("_"))
