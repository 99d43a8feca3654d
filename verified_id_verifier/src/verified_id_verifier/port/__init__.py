"""Port layer - Interfaces between the application core and adapters

Input Ports (Use Cases):
- CreatePresentationSession: Start a presentation request for a web session
- IngestCallback: Apply a request service callback to a session
- GetSessionStatus: Report session status to a polling client

Output Ports (External Dependencies):
- SessionStore: Web sessions and their presentation records
- TokenProvider: Access tokens for the request service
- VerificationClient: Verified ID request service
- QrCodeService: QR code rendering
"""

from verified_id_verifier.port.input import *
from verified_id_verifier.port.output import *
