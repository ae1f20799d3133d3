"""GPA calculator: class roster, weighted GPA and a Streamlit front end."""

__version__ = "0.1.0"
