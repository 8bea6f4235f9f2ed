"""JSON-file backed API for users, projects and user/project access grants."""
