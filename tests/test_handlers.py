"""
Direct tests for the host guard and command handlers.
"""
from reactivities.database import utcnow
from reactivities.models import ActivityAttendee, Comment
from reactivities.security import is_host
from reactivities.services import activities
from reactivities.services.result import ErrorKind


class TestHostGuard:

    def test_host_is_granted(self, db, make_user, make_activity):
        host = make_user()
        activity = make_activity(host)
        assert is_host(db, host.id, activity.id) is True

    def test_attendee_is_denied(self, db, make_user, make_activity):
        host, guest = make_user(), make_user()
        activity = make_activity(host, attendees=[guest])
        assert is_host(db, guest.id, activity.id) is False

    def test_stranger_is_denied(self, db, make_user, make_activity):
        activity = make_activity(make_user())
        assert is_host(db, make_user().id, activity.id) is False

    def test_unknown_activity_is_denied(self, db, make_user):
        assert is_host(db, make_user().id, "no-such-activity") is False

    def test_anonymous_is_denied(self, db, make_user, make_activity):
        activity = make_activity(make_user())
        assert is_host(db, None, activity.id) is False


class TestAddComment:

    def test_comment_not_written_is_a_persistence_failure(self, db, make_user, make_activity, monkeypatch):
        author = make_user()
        activity = make_activity(author)
        monkeypatch.setattr(activities, "save_changes", lambda session: False)

        result = activities.add_comment(db, activity.id, author, "Hello")

        assert not result.is_success
        assert result.kind == ErrorKind.PERSISTENCE
        assert result.status_code == 400
        assert result.error == "Failed to add comment"

    def test_comment_on_missing_activity(self, db, make_user):
        result = activities.add_comment(db, "missing", make_user(), "Hello")
        assert result.kind == ErrorKind.NOT_FOUND
        assert result.status_code == 404

    def test_comment_is_stored_with_author(self, db, make_user, make_activity):
        author = make_user(display_name="Author")
        activity = make_activity(author)

        result = activities.add_comment(db, activity.id, author, "Hello")

        assert result.is_success
        assert result.value.display_name == "Author"
        assert db.query(Comment).filter(Comment.activity_id == activity.id).count() == 1


class TestDeleteActivity:

    def test_missing_activity_is_not_found(self, db):
        result = activities.delete_activity(db, "missing")
        assert result.kind == ErrorKind.NOT_FOUND


class TestUpdateAttendance:

    def test_racing_join_is_reported_as_success(self, db, make_user, make_activity, monkeypatch):
        host, guest = make_user(), make_user()
        activity = make_activity(host)
        # Row written by a concurrent request after our lookup
        db.execute(
            ActivityAttendee.__table__.insert().values(
                user_id=guest.id, activity_id=activity.id, is_host=False, date_joined=utcnow()
            )
        )
        db.commit()
        monkeypatch.setattr(activities, "find_attendee", lambda *args: None)

        result = activities.update_attendance(db, activity.id, guest)

        assert result.is_success
        assert result.value.is_going is True
        rows = db.query(ActivityAttendee).filter(
            ActivityAttendee.activity_id == activity.id,
            ActivityAttendee.user_id == guest.id,
        )
        assert rows.count() == 1
