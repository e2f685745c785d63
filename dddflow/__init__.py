"""dddflow - static validation for domain-driven flow designs.

Usage:
    from dddflow.validator import validate_flow, validate_domain, validate_system

    result = validate_flow(flow_document)
    if not result.is_valid:
        for issue in result.issues:
            print(issue.severity.value, issue.message)
"""

__version__ = "0.1.0"
