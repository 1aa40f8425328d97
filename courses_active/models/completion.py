from .. import db

class CourseCompletion(db.Model):
    """Completion tracking record of one user in one course"""
    __tablename__ = 'course_completions'
    __table_args__ = (
        db.UniqueConstraint('userid', 'course', name='uq_course_completions_userid_course'),
    )

    id = db.Column(db.Integer, primary_key=True)
    userid = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    course = db.Column(db.Integer, db.ForeignKey('courses.id'), nullable=False, index=True)
    timeenrolled = db.Column(db.Integer, nullable=False, default=0)
    timestarted = db.Column(db.Integer, nullable=False, default=0)
    timecompleted = db.Column(db.Integer, nullable=True)

    def __repr__(self):
        return f'<CourseCompletion {self.userid} - {self.course}>'

    @property
    def is_active(self):
        """Started but not finished"""
        return self.timeenrolled > 0 and self.timestarted > 0 and self.timecompleted is None
