"""HTML instructions page served at GET /."""

from html import escape

INSTRUCTIONS_TEMPLATE = """<!DOCTYPE html>
<html>

<head>
    <title>{app_name}</title>
</head>

<body style="background-color: #F5F5F5; font-family: Arial, sans-serif; margin: 0; padding: 0;">
    <div style="display: flex; justify-content: center; align-items: center; height: 100vh;">
        <div style="background-color: #ffffff; border-radius: 10px; box-shadow: 0px 0px 10px 0px rgba(0,0,0,0.1); padding: 20px;">
            <h1 style="color: #333333; text-align: center;">{app_name}</h1>

            <p style="text-align: center; margin-bottom: 20px;">
                To get your API token for URL shortening, please send an email to: <a href="mailto:{contact_email}">{contact_email}</a>
            </p>

            <h2 style="text-align: center;">Instructions</h2>
            <p style="text-align: justify;">
                Once you have received your API token, you can shorten a URL by making a POST request to the path '/' with a payload containing 'url': 'your long url here'.
            </p>

            <pre style="background-color: #f8f8f8; border: 1px solid #ddd; padding: 10px; border-radius: 5px;">
{{
    "url": "http://www.your-long-url.com"
}}
            </pre>

            <p style="text-align: justify;">
                Make sure to include your API token in the request header as 'Authorization'.
            </p>

            <pre style="background-color: #f8f8f8; border: 1px solid #ddd; padding: 10px; border-radius: 5px;">
headers = {{
    "Authorization": "your_api_token"
}}
            </pre>

        </div>
    </div>
</body>

</html>
"""


def render_instructions(app_name: str, contact_email: str) -> str:
    return INSTRUCTIONS_TEMPLATE.format(
        app_name=escape(app_name),
        contact_email=escape(contact_email),
    )
