"""
Configuration test fixtures for the test suite.
"""

SAMPLE_CONFIG = {
    "logging": {
        "level": "INFO",
        "file": "logs/test.log",
        "format": "text",
        "rotation": {
            "enabled": True,
            "max_mb": 10,
            "backup_count": 5
        }
    },
    "loader": {
        "timeout_seconds": 5,
        "max_retries": 2,
        "allowed_domains": ["example.com"],
        "allow_http": False,
        "check_dns": False
    }
}

LOADER_CONFIG = {
    "loader": {
        "timeout_seconds": 1,
        "max_retries": 3,
        "check_dns": False
    }
}
