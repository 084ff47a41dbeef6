from .geography import Wilaya, Daira, Mutamadiya
from .official import MP, LocalDeputy
from .account import Account, TokenBlocklist
from .complaint import Complaint, ComplaintAuditLog, CoordinationEntry
from .registration import PendingRegistration
from .template import ReplyTemplate
from .notification import Notification
