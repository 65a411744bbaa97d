from healthtracker.app import db
from datetime import date

class HealthRecord(db.Model):
    __tablename__ = 'health_records'

    id = db.Column(db.Integer, primary_key=True)
    weight = db.Column(db.Float, nullable=False, default=0.0)  # in kg
    temperature = db.Column(db.Float, nullable=False, default=0.0)  # in Celsius
    blood_pressure = db.Column(db.Text, nullable=False, default='')  # e.g. '120/80'
    note = db.Column(db.Text, nullable=False, default='')
    date = db.Column(db.Date, nullable=False, default=date.today)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)

    def to_dict(self):
        return {
            'id': self.id,
            'user_id': self.user_id,
            'weight': self.weight,
            'temperature': self.temperature,
            'blood_pressure': self.blood_pressure,
            'note': self.note,
            'date': self.date.strftime('%Y-%m-%d') if self.date else None,
        }

    def __repr__(self):
        return f'<HealthRecord {self.id} user={self.user_id} date={self.date}>'
