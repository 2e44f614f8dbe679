from hvacpro.models.contractor import Contractor, ContractorStatus
from hvacpro.models.user import User, UserRole
from hvacpro.models.contact import Contact, ContactType
from hvacpro.models.job import Job, JobStatus
from hvacpro.models.appointment import Appointment, AppointmentStatus
from hvacpro.models.invoice import Invoice, InvoiceStatus
from hvacpro.models.review import Review, GoogleReview
from hvacpro.models.message import Message, MessageType
from hvacpro.models.activity import Activity, ActivityType
