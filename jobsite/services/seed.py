from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, timezone
from typing import Any

from jobsite.services.models import Contact, Project

DEMO_DATE = date(2024, 8, 22)


@dataclass
class Workspace:
    contacts: list[Contact] = field(default_factory=list)
    projects: list[Project] = field(default_factory=list)


def _day(offset: int = 0) -> str:
    return (DEMO_DATE + timedelta(days=offset)).isoformat()


def _moment(offset_days: int = 0, hour: int = 9) -> datetime:
    return datetime.combine(DEMO_DATE + timedelta(days=offset_days), time(hour), tzinfo=timezone.utc)


def _stamp(offset_days: int = 0, hour: int = 9) -> str:
    return _moment(offset_days, hour).isoformat().replace("+00:00", "Z")


def _upload_id(offset_days: int, hour: int = 9) -> str:
    return f"file-{int(_moment(offset_days, hour).timestamp() * 1000)}"


CONTACTS: list[dict[str, Any]] = [
    {"id": "contact-sample-1", "name": "Sarah Chen", "company": "Innovate Corp.", "role": "Client, Project Lead",
     "email": "sarah.chen@innovate.com", "phone": "555-321-7654", "billableRate": 0},
    {"id": "contact-sample-2", "name": "David Lee", "company": "Studio Design Architects", "role": "Lead Architect",
     "email": "d.lee@studiodesign.com", "phone": "555-987-1234", "billableRate": 175},
    {"id": "contact-sample-3", "name": "Mike Rodriguez", "company": "Power Electric", "role": "Electrical Subcontractor",
     "email": "mike@powerelectric.net", "phone": "555-456-7890", "billableRate": 95},
    {"id": "contact-sample-4", "name": "John Carter", "company": "Metro City Inspections", "role": "Building Inspector",
     "email": "jcarter@cityinspections.gov", "phone": "555-222-3333", "billableRate": 0},
    {"id": "contact-sample-5", "name": "Emily White", "company": "FlowRight Plumbing", "role": "Plumbing Subcontractor",
     "email": "emily.w@flowright.com", "phone": "555-888-9999", "billableRate": 85},
]


def sample_project() -> dict[str, Any]:
    return {
        "id": "proj-sample-123",
        "name": "Midtown Office Renovation",
        "address": "456 Commerce St, Suite 300, Metro City",
        "clientName": "Innovate Corp.",
        "usesScheduleOfValues": True,
        "contactIds": ["contact-sample-1", "contact-sample-2", "contact-sample-3", "contact-sample-5"],
        "rfiManager": {
            "managedRfis": [
                {"id": "rfi-sample-1", "subject": "LVT Flooring Specification",
                 "question": "The finish schedule on A-401 calls for \"LVT flooring\" in the main office area but "
                             "does not provide a manufacturer, model, or color. Please provide the specification.",
                 "status": "Answered", "answer": "Please use \"Tarkett SureStep LVT, Color: Oak Natural\".",
                 "analysis": "Scope: No change. Cost: Potential impact based on material cost difference from "
                             "allowance. Schedule: No impact.",
                 "log": [{"timestamp": _stamp(-3), "note": "Email sent to architect."}]},
                {"id": "rfi-sample-2", "subject": "Server Room Wall Fire Rating",
                 "question": "The plans do not specify a fire rating for the new walls surrounding the server room. "
                             "Please confirm if a specific fire rating (e.g., 1-hour) is required.",
                 "status": "Sent", "answer": "", "analysis": "", "log": []},
                {"id": "rfi-sample-3", "subject": "Conference Room Glass Type",
                 "question": "What type of glass should be used for the conference room sidelights?",
                 "status": "Draft", "answer": "", "analysis": "", "log": []},
            ]
        },
        "inspections": [
            {"id": "insp-sample-3", "inspectionNumber": 3, "type": "Framing Re-inspection",
             "recipientName": "John Carter", "recipientEmail": "jcarter@cityinspections.gov",
             "requestedDate": "2024-08-10", "status": "Open", "relatedInspectionId": "2", "isSigned": False,
             "auditLog": [{"timestamp": _stamp(-1), "user": "PM", "action": "Created follow-up inspection."}]},
            {"id": "insp-sample-2", "inspectionNumber": 2, "type": "Framing Inspection",
             "recipientName": "John Carter", "recipientEmail": "jcarter@cityinspections.gov",
             "requestedDate": "2024-08-05", "scheduledDate": "2024-08-06", "status": "Failed",
             "outcomeNotes": "Header over conference room door is undersized. Does not match structural drawings. "
                             "Needs to be replaced.",
             "isSigned": True, "signedBy": "John Carter", "signedAt": _stamp(-2), "driveFileId": "drive-sample-insp-2",
             "auditLog": [{"timestamp": _stamp(-3), "user": "PM", "action": "Created request."},
                          {"timestamp": _stamp(-2), "user": "John Carter",
                           "action": "Signed and finalized with status: Failed."}]},
            {"id": "insp-sample-1", "inspectionNumber": 1, "type": "Plumbing Rough-in",
             "recipientName": "John Carter", "recipientEmail": "jcarter@cityinspections.gov",
             "requestedDate": "2024-08-01", "scheduledDate": "2024-08-02", "status": "Passed",
             "isSigned": True, "signedBy": "John Carter", "signedAt": _stamp(-4), "driveFileId": "drive-sample-insp-1",
             "auditLog": [{"timestamp": _stamp(-5), "user": "PM", "action": "Created request."},
                          {"timestamp": _stamp(-4), "user": "John Carter",
                           "action": "Signed and finalized with status: Passed."}]},
        ],
        "dailyLogs": [
            {"id": "log-sample-1", "date": _day(-1),
             "notes": "Framing crew onsite. Completed rework of conference room header. All other areas cleared "
                      "for drywall. Awaiting re-inspection tomorrow.",
             "status": "Signed", "signedBy": "Project Manager", "signedAt": _stamp(-1, 17),
             "driveFileId": "drive-sample-log-1"},
            {"id": "log-sample-2", "date": _day(0),
             "notes": "Electrical subcontractor (Power Electric) onsite, continuing with pulling wire to all "
                      "receptacle locations.",
             "status": "Draft"},
        ],
        "email": [
            {"id": "email-sample-1", "from": "Sarah Chen (Innovate Corp.)", "subject": "Question about paint colors",
             "body": "Hi Team, Do you have the final date you need our paint color selections by? We are still "
                     "deciding between a few options. Thanks, Sarah",
             "timestamp": _stamp(-1), "read": False},
            {"id": "email-sample-2", "from": "Mike - Power Electric", "subject": "Light Fixture Delivery",
             "body": "Just confirming that the LED fixtures are scheduled for delivery to the site this Friday. "
                     "Let me know if there are any issues with site access. -Mike",
             "timestamp": _stamp(-2), "read": True},
            {"id": "email-sample-3", "from": "Building Management", "subject": "REMINDER: Freight Elevator Maintenance",
             "body": "The freight elevator will be out of service for scheduled maintenance on Monday from 8 AM to "
                     "12 PM. Please plan your deliveries accordingly.",
             "timestamp": _stamp(-3), "read": True},
        ],
        "drive": [
            {"id": "folder-1", "name": "Daily Logs", "type": "folder", "size": 0, "folderPath": "/", "isLocked": True},
            {"id": "folder-2", "name": "Inspections", "type": "folder", "size": 0, "folderPath": "/", "isLocked": True},
            {"id": "folder-3", "name": "Closeout", "type": "folder", "size": 0, "folderPath": "/", "isLocked": False},
            {"id": "folder-4", "name": "Photos", "type": "folder", "size": 0, "folderPath": "/", "isLocked": False},
            {"id": "folder-5", "name": "Receipts", "type": "folder", "size": 0, "folderPath": "/", "isLocked": False},
            {"id": "drive-sample-log-1", "name": "Daily-Log-2024-08-21.txt", "type": "text/plain", "size": 512,
             "folderPath": "/Daily Logs/", "isLocked": True},
            {"id": "drive-sample-insp-1", "name": "Inspection-001-Plumbing-Rough-in.txt", "type": "text/plain",
             "size": 480, "folderPath": "/Inspections/", "isLocked": True},
            {"id": "drive-sample-insp-2", "name": "Inspection-002-Framing.txt", "type": "text/plain", "size": 620,
             "folderPath": "/Inspections/", "isLocked": True},
            {"id": "drive-sample-1", "name": "A101-Architectural.pdf", "type": "application/pdf", "size": 2345678,
             "folderPath": "/", "isLocked": False},
            {"id": _upload_id(-5, 14), "name": "Site-Photo-2024-08-17.jpg", "type": "image/jpeg", "size": 4567890,
             "folderPath": "/Photos/", "isLocked": False,
             "caption": "Plumbing rough-in completed in the main core area ahead of inspection.",
             "annotationMethod": "manual"},
            {"id": _upload_id(0, 8), "name": "E1-Electrical-Plan-rev2.pdf", "type": "application/pdf",
             "size": 1123456, "folderPath": "/", "isLocked": False},
            {"id": "drive-sample-closeout-1", "name": "Warranty - HVAC System.pdf", "type": "application/pdf",
             "size": 345123, "folderPath": "/Closeout/", "isLocked": True},
            {"id": "drive-sample-closeout-2", "name": "As-Built Drawings - Architectural.pdf",
             "type": "application/pdf", "size": 5123456, "folderPath": "/Closeout/", "isLocked": True},
            {"id": "drive-sample-closeout-3", "name": "Final Building Permit.pdf", "type": "application/pdf",
             "size": 123456, "folderPath": "/Closeout/", "isLocked": True},
            {"id": "drive-receipt-1", "name": "receipt-homedepot.jpg", "type": "image/jpeg", "size": 12345,
             "folderPath": "/Receipts/", "isLocked": False},
        ],
        "invoicing": {
            "projectName": "Midtown Office Renovation",
            "applicationNumber": 2,
            "periodTo": "2024-08-31",
            "architectsProjectNumber": "IC-2024-01",
            "lineItems": [
                {"id": "li-1", "itemNumber": "100", "description": "General Conditions", "scheduledValue": 25000,
                 "prevBilled": 10000, "thisPeriod": 5000, "storedMaterials": 0},
                {"id": "li-2", "itemNumber": "200", "description": "Demolition", "scheduledValue": 15000,
                 "prevBilled": 15000, "thisPeriod": 0, "storedMaterials": 0},
                {"id": "li-3", "itemNumber": "300", "description": "Framing & Drywall", "scheduledValue": 75000,
                 "prevBilled": 20000, "thisPeriod": 35000, "storedMaterials": 0},
                {"id": "li-4", "itemNumber": "400", "description": "Electrical", "scheduledValue": 60000,
                 "prevBilled": 10000, "thisPeriod": 15000, "storedMaterials": 10000},
                {"id": "li-exp-2", "itemNumber": "EXP-01",
                 "description": "Reimbursable Expense: Sunbelt Rentals - Scissor lift rental for high ceiling work.",
                 "scheduledValue": 0, "prevBilled": 450, "thisPeriod": 0, "storedMaterials": 0,
                 "sourceExpenseId": "exp-sample-2"},
                # 16h at 85/h = 1360, discounted to 1275 on the invoice
                {"id": "li-time-1", "itemNumber": "LAB-01", "description": "Labor: Emily White - Plumbing Rough-in",
                 "scheduledValue": 0, "prevBilled": 0, "thisPeriod": 1275, "storedMaterials": 0,
                 "sourceTimeEntryIds": ["te-3"], "originalThisPeriodAmount": 1360},
            ],
            "changeOrders": [{"id": "co-1", "description": "Add 2 outlets in CEO office", "value": 950}],
            "retainagePercentage": 10,
            "materialsRetainagePercentage": 0,
            "previousPayments": 43200,
        },
        "riskManagement": {
            "risks": [
                {"id": "risk-1",
                 "description": "Failed framing inspection for undersized header requires immediate rework, "
                                "causing potential schedule delays and cost overruns.",
                 "category": "Quality", "severity": "High",
                 "mitigationPlan": "Notify architect of deficiency, draft change order for corrective work, and "
                                   "schedule re-inspection.",
                 "status": "Accepted", "createdAt": _stamp(-2),
                 "updates": [{"meetingId": "meeting-1", "timestamp": _stamp(-1),
                              "updateText": "Framing sub notified. Change order being drafted for rework.",
                              "status": "In Progress"}]},
                {"id": "risk-2",
                 "description": "Client has not provided paint color selections, which could delay the start of "
                                "finishing work.",
                 "category": "Schedule", "severity": "Medium",
                 "mitigationPlan": "Send a follow-up email to the client to get a decision by a firm deadline.",
                 "status": "Accepted", "createdAt": _stamp(-1),
                 "updates": [{"meetingId": "meeting-1", "timestamp": _stamp(-1),
                              "updateText": "Follow-up email sent to client. Deadline of this Friday communicated.",
                              "status": "In Progress"}]},
                {"id": "risk-3",
                 "description": "Freight elevator maintenance conflicts with a major material delivery, "
                                "potentially causing a one-day delay.",
                 "category": "Schedule", "severity": "Low",
                 "mitigationPlan": "Coordinate with the supplier to reschedule the delivery for the following day.",
                 "status": "Closed", "createdAt": _stamp(-3),
                 "updates": [{"meetingId": "meeting-1", "timestamp": _stamp(-1),
                              "updateText": "Delivery rescheduled with supplier. Issue resolved.",
                              "status": "Closed"}]},
                {"id": "risk-4",
                 "description": "An open RFI about server room fire rating could cause rework if construction "
                                "proceeds with incorrect specifications.",
                 "category": "Budget", "severity": "Medium",
                 "mitigationPlan": "Follow up with the architect and emphasize the need for a response.",
                 "status": "Rejected", "createdAt": _stamp(0), "updates": []},
            ],
            "meetings": [
                {"id": "meeting-1", "date": _stamp(-1), "title": "Weekly Sync - Week 5",
                 "attendees": ["PM", "Sarah Chen", "Mike Rodriguez"]},
            ],
        },
        "clientUpdates": [
            {"id": "update-1", "title": "Project Update: Week of August 5th",
             "summary": "We passed our plumbing inspection and addressed a framing issue, keeping the project "
                        "moving forward.",
             "publicationDate": _stamp(-3), "status": "Published",
             "sections": [
                 {"id": "sec-1-1", "heading": "Key Milestones This Week",
                  "content": "We passed our plumbing rough-in inspection on the first attempt.", "imageUrls": []},
                 {"id": "sec-1-2", "heading": "Looking Ahead",
                  "content": "- Complete framing rework\n- Schedule framing re-inspection", "imageUrls": []},
             ]},
            {"id": "update-2", "title": "Project Update: Week of August 19th",
             "summary": "Framing rework complete; re-inspection requested.",
             "publicationDate": "", "status": "Draft", "sections": []},
        ],
        "expenses": [
            {"id": "exp-sample-1", "date": _day(-4), "vendor": "Home Depot", "amount": 284.55,
             "category": "Supplies", "description": "Additional drywall screws and corner bead.",
             "invoicable": True, "status": "Pending", "sourceReceiptId": "drive-receipt-1"},
            {"id": "exp-sample-2", "date": _day(-10), "vendor": "Sunbelt Rentals", "amount": 450.00,
             "category": "Equipment Rental", "description": "Scissor lift rental for high ceiling work.",
             "invoicable": True, "status": "Invoiced", "sourceReceiptId": "drive-receipt-2"},
            {"id": "exp-sample-3", "date": _day(-2), "vendor": "Luigi's Pizza", "amount": 75.20,
             "category": "Meals", "description": "Lunch for the crew.",
             "invoicable": False, "status": "Pending", "sourceReceiptId": "drive-receipt-3"},
        ],
        "customReports": [
            {"id": "custom-inspections-by-status", "name": "Inspections by Status", "dataSource": "inspections",
             "fields": ["status"], "filters": [],
             "grouping": {"field": "status", "aggregation": "count", "aggField": "inspectionNumber"}},
        ],
        "timeEntries": [
            {"id": "te-1", "employeeId": "contact-sample-3", "date": _day(-3), "hours": 8,
             "costCode": "26-Electrical", "description": "Pulled wire for office receptacles.", "status": "Pending"},
            {"id": "te-2", "employeeId": "contact-sample-3", "date": _day(-2), "hours": 8,
             "costCode": "26-Electrical", "description": "Landed circuits in panel.", "status": "Pending"},
            {"id": "te-3", "employeeId": "contact-sample-5", "date": _day(-10), "hours": 16,
             "costCode": "22-Plumbing", "description": "Completed all rough-in for kitchenette.",
             "status": "Invoiced", "invoiceId": "inv-1"},
            {"id": "te-4", "employeeId": "contact-sample-5", "date": _day(-1), "hours": 4,
             "costCode": "22-Plumbing", "description": "Set fixtures in restrooms.", "status": "Draft"},
        ],
    }


def sample_workspace() -> Workspace:
    return Workspace(
        contacts=[Contact.model_validate(row) for row in CONTACTS],
        projects=[Project.model_validate(sample_project())],
    )
