from waitlist import create_app

# Local entry point. Serves the same /api/* routes as the Vercel deployment.
app = create_app()

if __name__ == '__main__':
    # Port 3001 keeps clear of the frontend dev server on 3000,
    # which is on the CORS allow-list.
    app.run(port=3001, debug=True)
