"""
OpenAPI schema customizations for drf-spectacular.

Tag naming follows the pattern: [App Name] - [Group Name]
Examples:
- Auth (register, login, token refresh)
- Users (account listing and self-service changes)
- Chat - Rooms (room membership and lifecycle)
- Chat - Messages (room transcripts and personal history)
"""

TAG_DESCRIPTIONS = [
    {
        "name": "Auth",
        "description": "Registration, login and token refresh. Tokens are invalidated when credentials change.",
    },
    {
        "name": "Users",
        "description": "User directory and self-service changes to display name, email and password.",
    },
    {
        "name": "Chat - Rooms",
        "description": "Rooms the current user belongs to. Any member may rename or delete a room.",
    },
    {
        "name": "Chat - Messages",
        "description": "Messages inside rooms. Only the sender may edit or delete a message.",
    },
]


def describe_tags(result, generator, request, public):
    """
    Postprocessing hook adding tag descriptions to the schema.

    Operations without an explicit tag from @extend_schema are grouped
    by their operation ID prefix.
    """
    paths = result.get("paths", {})

    for path, methods in paths.items():
        for method, operation in methods.items():
            if not isinstance(operation, dict):
                continue

            if operation.get("tags") and operation["tags"] != ["auth"]:
                continue

            operation_id = operation.get("operationId", "")
            if operation_id.startswith("auth_"):
                operation["tags"] = ["Auth"]

    result["tags"] = TAG_DESCRIPTIONS

    return result
