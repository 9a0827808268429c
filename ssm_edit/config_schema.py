"""
Configuration schema for ssm-edit.

This module defines the expected structure and validation rules for the
optional YAML defaults file.
"""

import jsonschema
from typing import Dict, Any


CONFIG_SCHEMA = {
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "prefix": {
            "type": "string",
            "description": "Parameter prefix to open when none is given on the command line"
        },
        "secure": {
            "type": "boolean",
            "description": "Mask SecureString values in the menu and edit prompt"
        },
        "quiet": {
            "type": "boolean",
            "description": "Suppress status messages"
        },
        "debug": {
            "type": "boolean",
            "description": "Print retry diagnostics"
        },
        "profile": {
            "type": "string",
            "description": "Named AWS profile"
        },
        "region": {
            "type": "string",
            "description": "AWS region"
        },
        "retry": {
            "type": "object",
            "additionalProperties": False,
            "properties": {
                "attempts": {
                    "type": "integer",
                    "minimum": 1,
                    "description": "Total write attempts"
                },
                "delay": {
                    "type": "number",
                    "minimum": 0,
                    "description": "Seconds between write attempts"
                }
            }
        }
    }
}


def validate_config(config: Dict[str, Any]) -> bool:
    """
    Validate the configuration against the schema.

    Args:
        config: Configuration dictionary to validate

    Returns:
        True if valid, raises jsonschema.ValidationError otherwise
    """
    jsonschema.validate(instance=config, schema=CONFIG_SCHEMA)
    return True
