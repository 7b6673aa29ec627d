BUCKET = "test-reader-cdn"
CDN = "https://cdn.example.test"
API_KEY = "s3cr3t"
