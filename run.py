from khelbharat import create_app

app = create_app()

if __name__ == '__main__':
    # The registry is a single in-process roster; serve one request at a time.
    app.run(debug=True, port=5000, threaded=False)
