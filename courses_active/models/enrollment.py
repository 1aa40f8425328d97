from .. import db

# Enrolment instance status
ENROL_INSTANCE_ENABLED = 0
ENROL_INSTANCE_DISABLED = 1

# User enrolment status
ENROL_USER_ACTIVE = 0
ENROL_USER_SUSPENDED = 1

class EnrolMethod(db.Model):
    """An enrolment instance (manual, self, cohort...) attached to a course"""
    __tablename__ = 'enrol'

    id = db.Column(db.Integer, primary_key=True)
    enrol = db.Column(db.String(20), nullable=False, default='manual')
    status = db.Column(db.Integer, nullable=False, default=ENROL_INSTANCE_ENABLED)
    courseid = db.Column(db.Integer, db.ForeignKey('courses.id'), nullable=False, index=True)

    # Relationships
    user_enrolments = db.relationship('UserEnrolment', backref='enrol_method', lazy=True)

    def __repr__(self):
        return f'<EnrolMethod {self.enrol} course={self.courseid}>'


class UserEnrolment(db.Model):
    """Enrolment of a user through one enrolment instance"""
    __tablename__ = 'user_enrolments'
    __table_args__ = (
        db.UniqueConstraint('enrolid', 'userid', name='uq_user_enrolments_enrolid_userid'),
    )

    id = db.Column(db.Integer, primary_key=True)
    status = db.Column(db.Integer, nullable=False, default=ENROL_USER_ACTIVE)
    enrolid = db.Column(db.Integer, db.ForeignKey('enrol.id'), nullable=False)
    userid = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    timestart = db.Column(db.Integer, nullable=False, default=0)
    timeend = db.Column(db.Integer, nullable=False, default=0)  # 0 = no end
    timecreated = db.Column(db.Integer, nullable=False, default=0)

    def __repr__(self):
        return f'<UserEnrolment {self.userid} - {self.enrolid}>'

    def to_dict(self):
        """Convert enrolment to dictionary"""
        return {
            'id': self.id,
            'status': self.status,
            'enrolid': self.enrolid,
            'userid': self.userid,
            'timestart': self.timestart,
            'timeend': self.timeend,
            'timecreated': self.timecreated
        }
