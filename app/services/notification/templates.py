"""
Email templates for complaint notifications.

HTML templates are autoescaped; plain-text templates are not.
"""

from typing import Any, Dict

from jinja2 import DictLoader, Environment, select_autoescape

PRIORITY_COLORS = {
    "High": "#dc3545",
    "Medium": "#ffc107",
    "Low": "#28a745",
}

STATUS_COLORS = {
    "Pending": "#6c757d",
    "In Progress": "#007bff",
    "Resolved": "#28a745",
    "Closed": "#343a40",
}

NEW_COMPLAINT_HTML = """
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
    <h2 style="color: #333; border-bottom: 2px solid #007bff; padding-bottom: 10px;">
        New Complaint Received
    </h2>

    <div style="background-color: #f8f9fa; padding: 20px; border-radius: 5px; margin: 20px 0;">
        <h3 style="color: #007bff; margin-top: 0;">Complaint Details</h3>
        <table style="width: 100%; border-collapse: collapse;">
            <tr>
                <td style="padding: 8px 0; font-weight: bold; width: 120px;">Title:</td>
                <td style="padding: 8px 0;">{{ title }}</td>
            </tr>
            <tr>
                <td style="padding: 8px 0; font-weight: bold;">Category:</td>
                <td style="padding: 8px 0;">{{ category }}</td>
            </tr>
            <tr>
                <td style="padding: 8px 0; font-weight: bold;">Priority:</td>
                <td style="padding: 8px 0;">
                    <span style="background-color: {{ priority_color }}; color: white; padding: 2px 8px; border-radius: 3px; font-size: 12px;">{{ priority }}</span>
                </td>
            </tr>
            <tr>
                <td style="padding: 8px 0; font-weight: bold;">Status:</td>
                <td style="padding: 8px 0;">{{ status }}</td>
            </tr>
            <tr>
                <td style="padding: 8px 0; font-weight: bold;">Date:</td>
                <td style="padding: 8px 0;">{{ date_submitted }}</td>
            </tr>
            {% if customer_name %}
            <tr>
                <td style="padding: 8px 0; font-weight: bold;">Customer:</td>
                <td style="padding: 8px 0;">{{ customer_name }}</td>
            </tr>
            {% endif %}
            {% if email %}
            <tr>
                <td style="padding: 8px 0; font-weight: bold;">Email:</td>
                <td style="padding: 8px 0;">{{ email }}</td>
            </tr>
            {% endif %}
        </table>
    </div>

    <div style="background-color: #ffffff; padding: 20px; border: 1px solid #dee2e6; border-radius: 5px;">
        <h4 style="color: #333; margin-top: 0;">Description:</h4>
        <p style="line-height: 1.6; color: #555;">{{ description }}</p>
    </div>

    <div style="margin-top: 20px; padding: 15px; background-color: #e9ecef; border-radius: 5px;">
        <p style="margin: 0; font-size: 14px; color: #666;">
            Please log in to the admin dashboard to manage this complaint.
        </p>
    </div>
</div>
"""

NEW_COMPLAINT_TEXT = """New Complaint Received

Title: {{ title }}
Category: {{ category }}
Priority: {{ priority }}
Status: {{ status }}
Date: {{ date_submitted }}
{% if customer_name %}Customer: {{ customer_name }}
{% endif %}{% if email %}Email: {{ email }}
{% endif %}
Description:
{{ description }}

Please log in to the admin dashboard to manage this complaint.
"""

STATUS_UPDATE_HTML = """
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
    <h2 style="color: #333; border-bottom: 2px solid #007bff; padding-bottom: 10px;">
        Complaint Status Update
    </h2>

    <p style="font-size: 16px; color: #333;">Dear {{ customer_name or "Customer" }},</p>

    <p style="line-height: 1.6; color: #555;">
        We wanted to update you on the status of your complaint. Here are the current details:
    </p>

    <div style="background-color: #f8f9fa; padding: 20px; border-radius: 5px; margin: 20px 0;">
        <table style="width: 100%; border-collapse: collapse;">
            <tr>
                <td style="padding: 8px 0; font-weight: bold; width: 120px;">Complaint:</td>
                <td style="padding: 8px 0;">{{ title }}</td>
            </tr>
            <tr>
                <td style="padding: 8px 0; font-weight: bold;">Status:</td>
                <td style="padding: 8px 0;">
                    <span style="background-color: {{ status_color }}; color: white; padding: 4px 12px; border-radius: 15px; font-size: 14px;">{{ status }}</span>
                </td>
            </tr>
            <tr>
                <td style="padding: 8px 0; font-weight: bold;">Category:</td>
                <td style="padding: 8px 0;">{{ category }}</td>
            </tr>
            <tr>
                <td style="padding: 8px 0; font-weight: bold;">Priority:</td>
                <td style="padding: 8px 0;">
                    <span style="background-color: {{ priority_color }}; color: white; padding: 2px 8px; border-radius: 3px; font-size: 12px;">{{ priority }}</span>
                </td>
            </tr>
            <tr>
                <td style="padding: 8px 0; font-weight: bold;">Last Updated:</td>
                <td style="padding: 8px 0;">{{ updated_on }}</td>
            </tr>
        </table>
    </div>

    {% if status == "Resolved" %}
    <div style="background-color: #d4edda; border: 1px solid #c3e6cb; padding: 15px; border-radius: 5px; margin: 20px 0;">
        <h4 style="color: #155724; margin-top: 0;">Great News!</h4>
        <p style="color: #155724; margin: 0;">
            Your complaint has been resolved. If you have any questions or concerns about the resolution,
            please don't hesitate to contact us.
        </p>
    </div>
    {% elif status == "In Progress" %}
    <div style="background-color: #cce7ff; border: 1px solid #99d6ff; padding: 15px; border-radius: 5px; margin: 20px 0;">
        <h4 style="color: #004085; margin-top: 0;">In Progress</h4>
        <p style="color: #004085; margin: 0;">
            We are actively working on your complaint. We'll keep you updated as we make progress.
        </p>
    </div>
    {% endif %}

    <div style="margin-top: 20px; padding: 15px; background-color: #e9ecef; border-radius: 5px;">
        <p style="margin: 0; font-size: 14px; color: #666;">
            Thank you for your patience. If you have any questions, please reply to this email.
        </p>
    </div>

    <p style="margin-top: 20px; color: #666; font-size: 14px;">
        Best regards,<br>
        Customer Support Team
    </p>
</div>
"""

STATUS_UPDATE_TEXT = """Dear {{ customer_name or "Customer" }},

We wanted to update you on the status of your complaint. Here are the current details:

Complaint: {{ title }}
Status: {{ status }}
Category: {{ category }}
Priority: {{ priority }}
Last Updated: {{ updated_on }}
{% if status == "Resolved" %}
Great News! Your complaint has been resolved. If you have any questions or concerns
about the resolution, please don't hesitate to contact us.
{% elif status == "In Progress" %}
We are actively working on your complaint. We'll keep you updated as we make progress.
{% endif %}
Thank you for your patience. If you have any questions, please reply to this email.

Best regards,
Customer Support Team
"""

_env = Environment(
    loader=DictLoader({
        "new_complaint.html": NEW_COMPLAINT_HTML,
        "new_complaint.txt": NEW_COMPLAINT_TEXT,
        "status_update.html": STATUS_UPDATE_HTML,
        "status_update.txt": STATUS_UPDATE_TEXT,
    }),
    autoescape=select_autoescape(enabled_extensions=("html",), default_for_string=False),
    trim_blocks=True,
    lstrip_blocks=True,
)


def render(template_name: str, context: Dict[str, Any]) -> str:
    """Render a named template."""
    return _env.get_template(template_name).render(**context).strip()
