"""Windows, images, fonts, boxes and text for drawing visual novel screens."""