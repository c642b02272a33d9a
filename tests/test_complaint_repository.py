import pytest

from app.core.exceptions import ResourceNotFoundError, ValidationError
from app.models.base.enums import ComplaintCategory, ComplaintStatus, Priority


def make(repository, **overrides):
    fields = {
        "title": "Broken heater",
        "description": "No heat since Monday",
        "category": "Technical",
        "priority": "High",
    }
    fields.update(overrides)
    return repository.create_complaint(**fields)


class TestCreate:
    def test_missing_required_fields_reported_in_order(self, repository):
        with pytest.raises(ValidationError) as exc_info:
            repository.create_complaint(title=None, description="  ", category=None, priority="")

        assert exc_info.value.details == [
            "Please provide a title for the complaint",
            "Please provide a description for the complaint",
            "Please select a category",
            "Please select a priority level",
        ]

    def test_length_and_literal_rules(self, repository):
        with pytest.raises(ValidationError) as exc_info:
            make(
                repository,
                title="x" * 201,
                description="y" * 2001,
                category="Food",
                priority="Urgent",
                email="not-an-email",
                customer_name="z" * 101,
            )

        assert exc_info.value.details == [
            "Title cannot be more than 200 characters",
            "Description cannot be more than 2000 characters",
            "Please select a valid category",
            "Please select a valid priority level",
            "Please provide a valid email address",
            "Customer name cannot be more than 100 characters",
        ]

    def test_boundary_lengths_accepted(self, repository):
        complaint = make(repository, title="x" * 200, description="y" * 2000, customer_name="z" * 100)
        assert len(complaint.title) == 200

    def test_status_starts_pending_and_text_is_normalized(self, repository):
        complaint = make(
            repository,
            title="  Broken heater  ",
            email="  A@B.COM ",
            customer_name="   ",
            user_id="user-1",
        )

        assert complaint.id
        assert complaint.title == "Broken heater"
        assert complaint.status is ComplaintStatus.PENDING
        assert complaint.category is ComplaintCategory.TECHNICAL
        assert complaint.priority is Priority.HIGH
        assert complaint.email == "a@b.com"
        assert complaint.customer_name is None
        assert complaint.user_id == "user-1"
        assert complaint.date_submitted is not None

    def test_ids_are_unique(self, repository):
        first = make(repository)
        second = make(repository)
        assert first.id != second.id


class TestUpdate:
    def test_partial_update_merges(self, repository):
        complaint = make(repository, email="a@b.com")

        updated = repository.update_complaint(complaint.id, {"status": "In Progress"})

        assert updated.status is ComplaintStatus.IN_PROGRESS
        assert updated.title == "Broken heater"
        assert updated.email == "a@b.com"

    def test_merged_document_is_revalidated(self, repository):
        complaint = make(repository)

        with pytest.raises(ValidationError) as exc_info:
            repository.update_complaint(complaint.id, {"title": "", "status": "Done"})

        assert exc_info.value.details == [
            "Please provide a title for the complaint",
            "Please select a valid status",
        ]
        assert repository.get_by_id(complaint.id).title == "Broken heater"

    def test_unknown_and_immutable_fields_rejected(self, repository):
        complaint = make(repository)

        with pytest.raises(ValidationError) as exc_info:
            repository.update_complaint(complaint.id, {"dateSubmitted": "2020-01-01", "colour": "red"})

        assert exc_info.value.details == [
            "Field 'dateSubmitted' cannot be updated",
            "Field 'colour' cannot be updated",
        ]

    def test_optional_fields_can_be_cleared(self, repository):
        complaint = make(repository, email="a@b.com", customer_name="Ann")

        updated = repository.update_complaint(complaint.id, {"email": None, "customer_name": ""})

        assert updated.email is None
        assert updated.customer_name is None

    def test_missing_id_is_not_found_not_validation(self, repository):
        with pytest.raises(ResourceNotFoundError):
            repository.update_complaint("missing", {"title": ""})


class TestDelete:
    def test_delete_is_permanent(self, repository):
        complaint = make(repository)

        repository.delete_complaint(complaint.id)

        assert repository.get_by_id(complaint.id) is None
        with pytest.raises(ResourceNotFoundError):
            repository.delete_complaint(complaint.id)


class TestList:
    def test_pagination_newest_first(self, repository, seed_complaints):
        seed_complaints([{} for _ in range(25)])

        items, total = repository.list_complaints(page=2, limit=10)

        assert total == 25
        assert [item.title for item in items] == [f"Complaint {i}" for i in range(14, 4, -1)]

    def test_last_page_is_partial(self, repository, seed_complaints):
        seed_complaints([{} for _ in range(25)])

        items, _ = repository.list_complaints(page=3, limit=10)

        assert [item.title for item in items] == [f"Complaint {i}" for i in range(4, -1, -1)]

    def test_filters_compose(self, repository, seed_complaints):
        seed_complaints([
            {"status": "Resolved", "priority": "High"},
            {"status": "Resolved", "priority": "Low"},
            {"priority": "High"},
            {"status": "Resolved", "priority": "High", "category": "Billing"},
        ])

        items, total = repository.list_complaints(status="Resolved", priority="High")

        assert total == 2
        assert {item.title for item in items} == {"Complaint 0", "Complaint 3"}

        items, total = repository.list_complaints(status="all", priority="High", category="Billing")
        assert total == 1
        assert items[0].title == "Complaint 3"

    def test_all_means_no_constraint(self, repository, seed_complaints):
        seed_complaints([{"status": "Closed"}, {}, {"status": "In Progress"}])

        _, total = repository.list_complaints(status="all", priority="all", category="all")

        assert total == 3

    def test_unknown_filter_value_matches_nothing(self, repository, seed_complaints):
        seed_complaints([{}, {"status": "Resolved"}])

        items, total = repository.list_complaints(status="Open")
        assert (items, total) == ([], 0)

        items, total = repository.list_complaints(status="all", priority="Urgent")
        assert (items, total) == ([], 0)
