from isdapresyo.db.repos.admin_repo import AdminRepo

__all__ = ["AdminRepo"]
