import io
import logging
import os
from pathlib import Path
from typing import List, Optional, Sequence

import markdown
from xhtml2pdf import pisa

logger = logging.getLogger(__name__)

REPORT_TITLE = "Strategic AI Marketing Planner - Marketing Plan"


def _image_grid_html(image_paths: Sequence[str]) -> str:
    existing = [p for p in image_paths or [] if p and os.path.exists(p)]
    if not existing:
        return ""
    html = "<h3>Charts</h3>"
    html += '<table style="width: 100%; border: none;">'
    for i, path in enumerate(existing):
        # two charts per row
        if i % 2 == 0:
            html += "<tr>"
        img_src = Path(path).resolve().as_posix()
        caption = os.path.splitext(os.path.basename(path))[0].replace("_", " ").title()
        html += f'''
            <td style="width: 50%; padding: 5px; vertical-align: top; border: none;">
                <div style="text-align: center;">
                    <img src="{img_src}" style="width: 320px; height: auto;" />
                    <p style="font-size: 8pt; color: #666;">{caption}</p>
                </div>
            </td>
        '''
        if i % 2 == 1 or i == len(existing) - 1:
            html += "</tr>"
    html += "</table>"
    return html


def build_report_html(markdown_content: str, image_paths: Optional[List[str]] = None) -> str:
    html_content = markdown.markdown(markdown_content or "", extensions=["tables", "fenced_code"])
    return f"""
    <html>
    <head>
        <style>
            @page {{
                size: A4;
                margin: 1.5cm;
            }}
            body {{
                font-family: Helvetica, Arial, sans-serif;
                font-size: 10pt;
                line-height: 1.4;
                color: #333;
            }}
            h1 {{ color: #1e3a8a; border-bottom: 2px solid #1e3a8a; padding-bottom: 10px; }}
            h2 {{ color: #6d28d9; margin-top: 20px; }}
            h3 {{ color: #34495e; margin-top: 15px; border-bottom: 1px solid #eee; }}
            table {{ width: 100%; border-collapse: collapse; margin: 10px 0; }}
            th, td {{ border: 1px solid #ddd; padding: 5px; text-align: left; }}
            th {{ background-color: #f2f2f2; font-weight: bold; }}
            blockquote {{ color: #666; font-style: italic; }}
            .footer {{ position: fixed; bottom: 0; width: 100%; text-align: center; font-size: 8pt; color: #aaa; }}
        </style>
    </head>
    <body>
        <div class="header"><p style="color: #999;">{REPORT_TITLE}</p></div>
        {html_content}
        <div class="visualizations">
            {_image_grid_html(image_paths or [])}
        </div>
        <div class="footer">Generated by Strategic AI Marketing Planner</div>
    </body>
    </html>
    """


def render_report_pdf(markdown_content: str, image_paths: Optional[List[str]] = None) -> Optional[bytes]:
    """Render the markdown plan to PDF bytes; None when xhtml2pdf reports an error."""
    buffer = io.BytesIO()
    try:
        pisa_status = pisa.CreatePDF(build_report_html(markdown_content, image_paths), dest=buffer)
    except Exception as exc:
        logger.warning("PDF_RENDER_FAILED error=%s message=%s", type(exc).__name__, str(exc)[:200])
        return None
    if pisa_status.err:
        logger.warning("PDF_RENDER_FAILED errors=%s", pisa_status.err)
        return None
    return buffer.getvalue()


def convert_report_to_pdf(
    markdown_content: str,
    output_filename: str = "marketing_plan.pdf",
    image_paths: Optional[List[str]] = None,
) -> bool:
    pdf_bytes = render_report_pdf(markdown_content, image_paths)
    if pdf_bytes is None:
        return False
    with open(output_filename, "wb") as pdf_file:
        pdf_file.write(pdf_bytes)
    logger.info("PDF_WRITTEN path=%s bytes=%d", output_filename, len(pdf_bytes))
    return True
