"""
PaveQuote — job scoping and quoting for asphalt contractors.

The calculation core (abn, gst, tonnage, pricing_engine) is pure Python with
no I/O; everything else is the FastAPI/SQLAlchemy shell around it.
"""
