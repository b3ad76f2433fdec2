# DocumentWise Version Configuration
# Central source of truth for all version information
# This file should be the ONLY place where version numbers are defined

from datetime import datetime
from typing import Dict, Any

# ============================================================================
# CENTRAL VERSION CONFIGURATION - SINGLE SOURCE OF TRUTH
# ============================================================================

DOCUMENTWISE_VERSION = "1.3.0"

VERSION_INFO = {
    "major": 1,
    "minor": 3,
    "patch": 0,
    "pre_release": None,
    "build": None,
}

VERSION_METADATA = {
    "version": DOCUMENTWISE_VERSION,
    "release_date": "2026-10-12",
    "release_name": "Structured Signature Reports & Document Chat",
    "description": "Proposal and document management front-end for the DocumentWise signature verification API.",
    "breaking_changes": [
        "API base URLs are read from DOCUMENTWISE_API_BASE_URL and DOCUMENTWISE_CHAT_API_BASE_URL",
    ],
    "new_features": [
        "Structured signature analysis report with per-stakeholder breakdown",
        "Chat sessions scoped to proposals and documents",
        "Iframe HTML view mode alongside inline HTML preview",
    ],
    "improvements": [
        "Proposal data cached per session and invalidated after every mutation",
        "Parallel loading of proposal details and sidebar proposals",
    ],
    "bug_fixes": [
        "Out-of-range page navigation no longer triggers page asset requests",
    ],
}

# ============================================================================
# VERSION FORMATTING FUNCTIONS
# ============================================================================

def get_version_string() -> str:
    """Get the full version string (e.g., 'v1.3.0')"""
    return f"v{DOCUMENTWISE_VERSION}"

def get_version_display() -> str:
    """Get version for UI display with release name"""
    return f"{get_version_string()} - {VERSION_METADATA['release_name']}"

def get_full_version_info() -> Dict[str, Any]:
    """Get complete version information"""
    return {
        **VERSION_INFO,
        **VERSION_METADATA,
        "formatted_version": get_version_string(),
        "display_version": get_version_display(),
    }

def get_version_footer() -> str:
    """Get version footer for pages"""
    return f"Version: {get_version_string()} • {VERSION_METADATA['description']}"

# ============================================================================
# VERSION VALIDATION
# ============================================================================

def validate_version_format(version: str) -> bool:
    """Validate that a version string follows semantic versioning"""
    import re
    pattern = r'^v?\d+\.\d+\.\d+(-[a-zA-Z0-9-]+)?(\+[a-zA-Z0-9-]+)?$'
    return bool(re.match(pattern, version))

if not validate_version_format(DOCUMENTWISE_VERSION):
    raise ValueError(f"Invalid version format: {DOCUMENTWISE_VERSION}")

# ============================================================================
# EXPORT CONSTANTS FOR EASY IMPORTING
# ============================================================================

VERSION = DOCUMENTWISE_VERSION
VERSION_STRING = get_version_string()
VERSION_DISPLAY = get_version_display()
RELEASE_DATE = VERSION_METADATA['release_date']

LAST_UPDATED = datetime.now().isoformat()
