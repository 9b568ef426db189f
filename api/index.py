"""
Vercel Serverless Entry Point

Vercel's Python runtime routes every /api/* request here and looks for a
WSGI callable named `app`. The app factory reads configuration once per
cold start; warm invocations reuse the app and its Supabase client.
"""

from waitlist import create_app

app = create_app()
