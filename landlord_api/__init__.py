"""
Landlord API: property, appliance, maintenance and rent tracking for landlords.
"""

__version__ = "1.0.0"
