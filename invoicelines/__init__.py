"""Line-item recovery from text extracted out of invoice PDFs."""
