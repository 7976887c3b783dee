"""BTO allocation core: applications, flat inventory, officer assignment and enquiries"""

__version__ = "1.0.0"
