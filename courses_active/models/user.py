from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash
from .. import db, login_manager

VIEW_HIDDEN_COURSES = 'moodle/course:viewhiddencourses'

@login_manager.user_loader
def load_user(user_id):
    return db.session.get(User, int(user_id))

class User(UserMixin, db.Model):
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(64), unique=True, nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False)
    password_hash = db.Column(db.String(256))
    is_guest = db.Column(db.Boolean, nullable=False, default=False)

    # Relationships
    enrolments = db.relationship('UserEnrolment', backref='user', lazy=True)
    completions = db.relationship('CourseCompletion', backref='user', lazy=True)
    capability_grants = db.relationship('CapabilityGrant', backref='user', lazy=True)

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)

    def get_id(self):
        return str(self.id)

    def __repr__(self):
        return f'<User {self.username}>'


class CapabilityGrant(db.Model):
    """A capability held by a user in one course, or site-wide when courseid is NULL"""
    __tablename__ = 'capability_grants'

    id = db.Column(db.Integer, primary_key=True)
    userid = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    capability = db.Column(db.String(255), nullable=False)
    courseid = db.Column(db.Integer, db.ForeignKey('courses.id'), nullable=True)

    def __repr__(self):
        scope = self.courseid if self.courseid is not None else 'site'
        return f'<CapabilityGrant {self.userid} {self.capability} @{scope}>'


def is_real_user(user):
    """True for a signed-in identity that is not the guest account"""
    if user is None or not getattr(user, 'is_authenticated', False):
        return False
    return not getattr(user, 'is_guest', False)
