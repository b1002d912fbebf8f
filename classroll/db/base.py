from sqlalchemy.ext.declarative import declarative_base

Base = declarative_base()
import classroll.models.user
import classroll.models.profile
import classroll.models.token
import classroll.models.classroom
import classroll.models.student
import classroll.models.attendance
import classroll.models.qr_session
