"""Campus ERP backend services (admin and academic)"""

__version__ = "1.0.0"
