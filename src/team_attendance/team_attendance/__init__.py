"""Team attendance package.

Organized by feature modules (users, attendance, leave, stats) with a thin
Flask controller layer over service/repository layers. The monthly statistics
engine in ``stats.engine`` is pure and can be used without the rest.
"""
