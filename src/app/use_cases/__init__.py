"""
Use Cases

Organized into domain folders:
- auth/: signup, login, logout
- users/: current user and profile changes
- entities/: generic entity CRUD under the access policy
- organizations/: join workflow and organization-specific writes
- admin/: one-time administrative bootstrap

Import from subdirectories.
"""
