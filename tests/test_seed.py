from models.users import User
from utils.permissions import Permission, PermissionManager
from utils.seed import (
    COMPANY_SETTINGS,
    default_leave_balance,
    get_company_settings,
    initialize_database,
    is_database_initialized,
)


class TestInitializeDatabase:

    def test_first_run_seeds_everything(self, db):
        assert not is_database_initialized()

        admin_id = initialize_database("admin@edecs.com", "Admin123", "System Admin")

        assert is_database_initialized()
        assert db.roles.count_documents({}) == 4
        assert db.departments.count_documents({}) == 3
        assert db.leave_types.find_one({"_id": "annual"})["default_days"] == 21
        assert db.employment_types.count_documents({}) == 4
        assert db.document_categories.count_documents({}) == 4
        assert db.settings.find_one({"_id": "company"})["name"] == COMPANY_SETTINGS["name"]

        admin = User.find_by_id(admin_id)
        assert admin["email"] == "admin@edecs.com"
        assert admin["display_name"] == "System Admin"
        assert admin["leave_balance"] == default_leave_balance()
        assert db.roles.find_one({"_id": "admin"})["created_by"] == admin_id

    def test_admin_holds_every_permission(self, db):
        admin_id = initialize_database("admin@edecs.com", "Admin123")
        assert PermissionManager.get_user_permissions(admin_id) == {"*"}
        assert PermissionManager.has_all_permissions(admin_id, list(Permission))
        assert User.verify_password("admin@edecs.com", "Admin123")["_id"] == User.find_by_id(admin_id)["_id"]

    def test_second_run_is_a_no_op(self, db):
        initialize_database("admin@edecs.com", "Admin123")

        assert initialize_database("other@edecs.com", "Other123") is None
        assert db.users.count_documents({}) == 1
        assert db.roles.count_documents({}) == 4
        assert db.leave_types.count_documents({}) == 4

    def test_interrupted_seed_is_completed(self, db):
        # catalogs written but the admin never was
        db.roles.insert_one({"_id": "admin", "name": "Administrator", "level": 1, "permissions": ["*"]})

        admin_id = initialize_database("admin@edecs.com", "Admin123")

        assert admin_id is not None
        assert db.roles.count_documents({}) == 4
        assert "created_at" in db.roles.find_one({"_id": "employee"})


class TestCompanySettings:

    def test_defaults_before_seed(self, db):
        assert get_company_settings() == COMPANY_SETTINGS

    def test_reads_stored_settings(self, db):
        initialize_database("admin@edecs.com", "Admin123")
        db.settings.update_one({"_id": "company"}, {"$set": {"name": "ACME"}})
        assert get_company_settings()["name"] == "ACME"

    def test_defaults_are_a_copy(self, db):
        settings = get_company_settings()
        settings["working_hours"]["start"] = "06:00"
        assert COMPANY_SETTINGS["working_hours"]["start"] == "09:00"
