"""OfficeRoute attendance package.

Organized by feature modules (geofence, attendance, sync, ...) with a thin
Flask controller layer over service/repository layers.
"""
