"""
Use Cases

Organized into domain folders:
- auth/: Registration and login
- tenants/: Tenant management and tenant users
- users/: User profile, update and delete
- projects/: Project management
- tasks/: Task management
- audit/: Audit log
"""
