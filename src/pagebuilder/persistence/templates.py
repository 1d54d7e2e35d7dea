"""Built-in templates every store starts with."""

from typing import Any

BLANK_PAGE: dict[str, Any] = {
    "name": "Blank Page",
    "description": "An empty page",
    "components": [],
}

# Stored without names or styles; both are filled in when the forest is loaded.
LOGIN_PAGE: dict[str, Any] = {
    "name": "Login Page",
    "description": "Login form with username and password fields",
    "components": [
        {
            "id": "title-1",
            "type": "text",
            "props": {
                "content": "Welcome back",
                "fontSize": "text-2xl",
                "fontWeight": "font-bold",
                "color": "text-gray-900",
            },
        },
        {
            "id": "input-1",
            "type": "input",
            "props": {"placeholder": "Username", "type": "text"},
        },
        {
            "id": "input-2",
            "type": "input",
            "props": {"placeholder": "Password", "type": "password"},
        },
        {
            "id": "button-1",
            "type": "button",
            "props": {"text": "Sign in", "variant": "default", "size": "default"},
        },
    ],
}

BUILTIN_TEMPLATES: tuple[dict[str, Any], ...] = (BLANK_PAGE, LOGIN_PAGE)
