"""System timer, GPIO and mini UART models over simulated peripheral memory."""