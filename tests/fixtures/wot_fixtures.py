"""
WoT test fixtures.

Thing Models and Thing Descriptions as decoded JSON documents.
"""

TD_CONTEXT = "https://www.w3.org/2019/wot/td/v1"

MINIMAL_TM = {
    "@context": [TD_CONTEXT],
    "@type": "Thing",
}

LAMP_TM = {
    "@context": [
        TD_CONTEXT,
        {"cap": "https://example.com/capability/cap"},
        {"cap": "https://example.com/capability/v2", "ex": "https://example.com/ex"},
    ],
    "@type": "tm:ThingModel",
    "title": "Lamp",
    "version": {"instance": "1.0.0"},
    "links": [{"href": "https://example.com/license", "rel": "license"}],
    "properties": {
        "status": {
            "title": "Status",
            "description": "Current lamp status",
            "type": "string",
            "enum": ["on", "off"],
            "readOnly": True,
            "observable": True,
        },
        "brightness": {
            "type": "integer",
            "minimum": 0,
            "maximum": 100,
            "default": 50,
            "const": "fifty",
            "writeOnly": False,
        },
        "untyped": {"default": 3, "enum": [1, 2]},
    },
    "actions": {
        "toggle": {
            "title": "Toggle",
            "input": {"type": "boolean", "title": "Target state"},
            "output": {"type": "number", "unit": "W"},
            "safe": False,
        }
    },
    "events": {
        "overheating": {
            "description": "Lamp is too hot",
            "data": {"type": "number", "minimum": 60},
        }
    },
}

LAMP_TD = {
    "@context": TD_CONTEXT,
    "id": "urn:dev:ops:32473-WoTLamp-1234",
    "title": "MyLampThing",
    "securityDefinitions": {
        "basic_sc": {"scheme": "basic", "in": "header"},
    },
    "security": "basic_sc",
    "properties": {
        "status": {
            "type": "string",
            "forms": [{"href": "https://mylamp.example.com/status"}],
        }
    },
    "actions": {
        "toggle": {
            "forms": [{"href": "https://mylamp.example.com/toggle", "op": "invokeaction"}],
        }
    },
    "events": {
        "overheating": {
            "data": {"type": "string"},
            "forms": [{"href": "https://mylamp.example.com/oh", "subprotocol": "longpoll"}],
        }
    },
}
