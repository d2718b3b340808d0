"""
ClinicBook: doctor schedule resolution and appointment booking service

Resolves which weekly schedule applies to a doctor on a date, lists the
bookable slots and books them so that a slot is never held twice.
"""

__version__ = "0.1.0"
__description__ = "Clinic appointment slot resolution and booking service"
