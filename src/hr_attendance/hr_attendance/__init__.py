"""HR attendance package.

Organized by feature modules (attendance, employees, tenants, tasks, ...)
with a thin Flask controller layer, service/repository layers and a
background scheduler for the daily absence sweep.
"""
