from .. import db

class Course(db.Model):
    """Course model for storing course information"""
    __tablename__ = 'courses'

    id = db.Column(db.Integer, primary_key=True)
    category = db.Column(db.Integer, nullable=False, default=0)
    sortorder = db.Column(db.Integer, nullable=False, default=0)
    shortname = db.Column(db.String(255), nullable=False, default='')
    fullname = db.Column(db.String(254), nullable=False, default='')
    idnumber = db.Column(db.String(100), nullable=False, default='')
    summary = db.Column(db.Text)
    format = db.Column(db.String(21), nullable=False, default='topics')
    startdate = db.Column(db.Integer, nullable=False, default=0)
    enddate = db.Column(db.Integer, nullable=False, default=0)
    visible = db.Column(db.Boolean, nullable=False, default=True)
    groupmode = db.Column(db.Integer, nullable=False, default=0)
    groupmodeforce = db.Column(db.Integer, nullable=False, default=0)
    lang = db.Column(db.String(30), nullable=False, default='')
    timecreated = db.Column(db.Integer, nullable=False, default=0)
    timemodified = db.Column(db.Integer, nullable=False, default=0)

    # Relationships
    enrol_methods = db.relationship('EnrolMethod', backref='course', lazy=True)
    completions = db.relationship('CourseCompletion', backref='course_record', lazy=True)

    def __repr__(self):
        return f'<Course {self.shortname}>'

    @classmethod
    def column_names(cls):
        """Names of every column of the courses table, in table order"""
        return tuple(column.name for column in cls.__table__.columns)

    def to_dict(self):
        """Convert course to dictionary"""
        return {name: getattr(self, name) for name in self.column_names()}
